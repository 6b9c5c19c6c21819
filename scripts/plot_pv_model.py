"""
Plot the PV model curve (Eq 8), optionally over observed PV points.

Run from repo root:
    python scripts/plot_pv_model.py --out pv_model.png
    python scripts/plot_pv_model.py --obs data/observed/observed-pv.json --p 0.2 --p 3.0

Each --p value adds one curve, so the effect of limb brightening on the
model can be read off a single figure. No unicode (Windows charmap).
"""

import argparse
import os
import sys

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from data.observations import load_observations
from physics.params import ParameterSet
from physics.velocity import pv_model_curve, wake_baseline_velocity


def main():
    ap = argparse.ArgumentParser(description="Plot the RBH-1 PV model curve.")
    ap.add_argument("--obs", default=None, help="Observed PV fixture (JSON with 'points')")
    ap.add_argument("--p", type=float, action="append", default=None,
                    help="Emissivity index; repeat for several curves (default: paper value)")
    ap.add_argument("--v-star", type=float, default=None, help="BH velocity [km/s]")
    ap.add_argument("--r-ring", type=float, default=None, help="Aperture radius [kpc]")
    ap.add_argument("--n-points", type=int, default=200)
    ap.add_argument("--out", default="pv_model.png")
    args = ap.parse_args()

    base = ParameterSet()
    if args.v_star is not None:
        base = base.with_changes(v_star=args.v_star)
    if args.r_ring is not None:
        base = base.with_changes(R_ring=args.r_ring)

    fig, ax = plt.subplots(figsize=(7, 5))

    for p in args.p or [base.p]:
        params = base.with_changes(p=p)
        curve = pv_model_curve(params, args.n_points)
        ax.plot(curve["x"], curve["v"], '-', linewidth=2, label='Model, p = %.1f' % p)

    v_wake = wake_baseline_velocity(base.v_star, base.chi, base.i)
    ax.axhline(-v_wake, color='gray', linestyle='--', linewidth=1,
               label='Wake baseline (%.0f km/s)' % -v_wake)

    if args.obs:
        points = load_observations(args.obs, "x")
        ax.errorbar([pt["x"] for pt in points], [pt["v"] for pt in points],
                    yerr=[pt.get("v_err", 0.0) for pt in points],
                    fmt='o', color='black', markersize=4, capsize=2, label='Observed')

    ax.set_xlabel('Projected position x [kpc]')
    ax.set_ylabel('LOS velocity [km/s]')
    ax.set_title('PV model (v* = %.0f km/s, i = %.0f deg, R_ring = %.1f kpc)'
                 % (base.v_star, base.i, base.R_ring))
    ax.legend(loc='best', fontsize=8)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(args.out, dpi=150, bbox_inches='tight')
    plt.close()
    print('Saved: %s' % args.out)


if __name__ == '__main__':
    main()
