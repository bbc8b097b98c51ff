"""
12AX7 resistance coupled preamp stage.

Setup
-----
- Koren model of the 12AX7 (koonw fit).
- 350 V supply, 180 kΩ plate resistor, single ended.

The script
----------
- sets the quiescent current to 0.7 mA under fixed bias and reads the bias
  voltage and the cathode resistor that would produce it,
- switches to cathode bias and lets the engine settle the self-consistent
  operating point,
- drives the stage with 1 V peak and reports gain and output swing.

Run with --trace to print every recompute the engine performs.
"""

import sys
from pathlib import Path

project_root = Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tubeamp import Amp, find_tube
from tubeamp.amp import analysis
from tubeamp.logging import enable_debug_logging


def main() -> None:
    amp = Amp.from_tube(find_tube("12AX7"))
    amp.bias_method = "fixed"
    amp.Bplus = 350
    amp.Rp = 180000
    amp.Iq = 0.0007

    print("Fixed bias")
    print(f"  Vq = {amp.Vq:.1f} V, Iq = {amp.Iq * 1e3:.3f} mA, Vg = {amp.Vg:.3f} V")
    print(f"  cathode resistor for this bias: {amp.cathode_load_line.rk():.0f} Ω")
    print(f"  {amp.dc_load_line_info()}")

    amp.bias_method = "cathode"
    print("Cathode bias")
    print(f"  Vq = {amp.Vq:.1f} V, Iq = {amp.Iq * 1e3:.3f} mA, Vg = {amp.Vg:.3f} V, Rk = {amp.Rk:.0f} Ω")

    amp.Znext = 1e6
    amp.input_headroom = 1.0
    lo, hi = analysis.output_headroom(amp)
    print("Signal, 1 V peak into 1 MΩ")
    print(f"  {amp.ac_load_line_info()}")
    print(f"  gain = {analysis.effective_amplification_factor(amp):.1f}")
    print(f"  output swing = {lo:+.1f} V / {hi:+.1f} V")
    print(f"  output = {analysis.output_voltage_rms(amp):.2f} V rms")


if __name__ == "__main__":
    if "--trace" in sys.argv:
        enable_debug_logging()
    main()
