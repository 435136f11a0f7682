"""Status register bit masks."""

from __future__ import annotations

FLAG_C = 0x01  # carry
FLAG_Z = 0x02  # zero
FLAG_I = 0x04  # interrupt disable
FLAG_D = 0x08  # decimal mode, no arithmetic effect
FLAG_B = 0x10  # break
FLAG_U = 0x20  # unused, reads as 1
FLAG_V = 0x40  # overflow
FLAG_N = 0x80  # negative

# Display order, most significant bit first.
FLAG_NAMES = (
    ("N", FLAG_N),
    ("V", FLAG_V),
    ("-", FLAG_U),
    ("B", FLAG_B),
    ("D", FLAG_D),
    ("I", FLAG_I),
    ("Z", FLAG_Z),
    ("C", FLAG_C),
)
