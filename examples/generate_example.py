"""Parse an example config and show what the packed buffer looks like."""

import sys
sys.path.insert(0, str(__import__("pathlib").Path(__file__).parent.parent))

from inipack.config import IniConfig
from inipack import converters

SOURCE = """\
; Board configuration
name = sensor-node

[uart]
baud = 115200
parity = none

[adc]
vref = 3.3
channels = 4
"""

config = IniConfig(SOURCE)

output = __import__("pathlib").Path(__file__).parent / "hello.ini"
output.write_text(SOURCE, encoding="utf-8")
print(f"Wrote {output} ({config.size()} pairs, {config.layout.capacity} buffer bytes)")

print()
print("=" * 60)
print("PACKED BUFFER:")
print("=" * 60)
print()
print(config.buffer)

print()
print("uart.baud  =", config.get_int("baud", section="uart"))
print("adc.vref   =", config.get_float("vref", section="adc"))
print("missing    =", repr(config.get("missing")))
print()
print(converters.to_json(config))
