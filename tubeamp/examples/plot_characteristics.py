"""
Plate characteristics of a tube with the stage's load lines on top.

Draws the Ip-Vp family across the tube's grid range, the maximum dissipation
hyperbola, the DC and AC load lines, the cathode load line and the
operating point of a default 12AX7 stage. Pass another preset name as first
argument to plot that tube instead.
"""

import sys
from pathlib import Path

import matplotlib.pyplot as plt

project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tubeamp import Amp, find_tube
from tubeamp.amp import analysis


def _xy(points):
    return [p.x for p in points], [p.y * 1e3 for p in points]


def main() -> None:
    name = sys.argv[1] if len(sys.argv) > 1 else "12AX7"
    amp = Amp.from_tube(find_tube(name))
    amp.Znext = 1e6

    fig, ax = plt.subplots(figsize=(8, 6))
    for curve in analysis.graph_vg_vp_ip(amp):
        x, y = _xy(curve.VpIp)
        ax.plot(x, y, color="tab:gray", linewidth=0.8)
        if x:
            ax.annotate(f"{curve.Vg:g} V", (x[-1], y[-1]), fontsize=7)

    ax.plot(*_xy(analysis.graph_pp(amp)), color="tab:red", linestyle="--", label="Pmax")
    ax.plot(*_xy(analysis.graph_dc_load_line(amp)), color="tab:blue", label="DC load")
    ax.plot(*_xy(analysis.graph_ac_load_line(amp)), color="tab:green", label="AC load")
    ax.plot(*_xy(analysis.graph_cathode_load_line(amp)), color="tab:orange", label="Cathode")
    ax.plot(*_xy(analysis.graph_operating_point(amp)), "ko", label="Operating point")

    ax.set_xlim(0, amp.limits.max_vp0)
    ax.set_ylim(0, amp.limits.max_ip * 1e3)
    ax.set_xlabel("Plate voltage [V]")
    ax.set_ylabel("Plate current [mA]")
    ax.set_title(f"{amp.name}: Vq={amp.Vq:.0f} V, Iq={amp.Iq * 1e3:.2f} mA, Vg={amp.Vg:.2f} V")
    ax.grid(True)
    ax.legend()
    fig.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
