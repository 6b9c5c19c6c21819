"""
Plot the wake velocity (Eq 19) and shock velocity (Eq 13) along the wake.

Run from repo root:
    python scripts/plot_wake_profile.py --out wake_profile.png
    python scripts/plot_wake_profile.py --obs data/observed/observed-wake.json --fit

With --fit the delayed-mixing parameters are fitted to the observed points
and the fitted curve is drawn next to the paper curve.
No unicode (Windows charmap).
"""

import argparse
import os
import sys

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from data.observations import load_observations
from physics.fitting import fit_wake_profile
from physics.params import ParameterSet
from physics.shockvel import shock_velocity_curve
from physics.wake import wake_velocity_curve


def main():
    ap = argparse.ArgumentParser(description="Plot the RBH-1 wake and shock velocity profiles.")
    ap.add_argument("--obs", default=None, help="Observed wake fixture (JSON with 'points')")
    ap.add_argument("--fit", action="store_true", help="Fit v0, dr_delay, l_mix to --obs")
    ap.add_argument("--n-points", type=int, default=300)
    ap.add_argument("--out", default="wake_profile.png")
    args = ap.parse_args()

    if args.fit and not args.obs:
        ap.error("--fit requires --obs")

    params = ParameterSet()
    wake = wake_velocity_curve(params, args.n_points)
    shock = shock_velocity_curve(params, args.n_points)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    ax1.plot(wake["r"], wake["v"], '-', color='steelblue', linewidth=2.5,
             label='Delayed mixing (v0 = %.0f, dr = %.0f, l = %.0f)'
             % (params.v0, params.dr_delay, params.l_mix))

    if args.obs:
        points = load_observations(args.obs, "r")
        ax1.errorbar([pt["r"] for pt in points], [pt["v"] for pt in points],
                     yerr=[pt.get("v_err", 0.0) for pt in points],
                     fmt='o', color='black', markersize=4, capsize=2, label='Observed')
        if args.fit:
            fit = fit_wake_profile(points, params)
            if fit is None:
                print('Fit skipped: fewer than 3 usable points')
            else:
                fitted = wake_velocity_curve(fit["params"], args.n_points)
                ax1.plot(fitted["r"], fitted["v"], '--', color='crimson', linewidth=2,
                         label='Fit (v0 = %.0f, dr = %.1f, l = %.1f, chi2_r = %.2f)'
                         % (fit["v0"], fit["dr_delay"], fit["l_mix"], fit["chi2_reduced"]))

    ax1.set_xlabel('Distance from galaxy r [kpc]')
    ax1.set_ylabel('Wake velocity [km/s]')
    ax1.set_title('Wake velocity (Eq 19)')
    ax1.legend(loc='best', fontsize=8)
    ax1.grid(True, alpha=0.3)

    ax2.plot(shock["r"], shock["v"], '-', color='darkorange', linewidth=2.5,
             label='R_c = %.1f kpc' % params.R_c)
    ax2.set_xlabel('Distance from galaxy r [kpc]')
    ax2.set_ylabel('Shock velocity [km/s]')
    ax2.set_title('Shock velocity (Eq 13)')
    ax2.set_ylim(0, None)
    ax2.legend(loc='best', fontsize=8)
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(args.out, dpi=150, bbox_inches='tight')
    plt.close()
    print('Saved: %s' % args.out)


if __name__ == '__main__':
    main()
