"""
6L6GC push-pull output stage.

Fixed bias, 7.6 kΩ plate-to-plate transformer at 360 V. The stage is
compared in pentode, ultralinear (40 % tap) and triode connection at the same
quiescent current, printing the bias each needs and the power it can deliver.
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tubeamp import Amp, find_tube
from tubeamp.amp import analysis


def main() -> None:
    amp = Amp.from_tube(find_tube("6L6GC"))
    amp.ultralinear_tap = 40
    print(amp.dc_load_line_info())

    for mode in ("pentode", "ultralinear", "triode"):
        amp.mode = mode
        amp.Iq = 0.05
        amp.input_headroom = -amp.Vg
        print(f"{mode:>11}: Vg = {amp.Vg:6.2f} V, Vg2 = {amp.Vg2:.0f} V, "
              f"Pmax = {analysis.max_output_power_rms(amp):5.1f} W, "
              f"swing = {analysis.output_voltage_rms(amp):6.1f} V rms")


if __name__ == "__main__":
    main()
