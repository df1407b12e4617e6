# usage_example.py
# Minimal usage example for whowon.select_winners.
# This file is not part of the whowon package. For reference only.

from datetime import datetime

from whowon import SelectionPreset, SelectionRequest, apply_preset, select_winners

# Inputs
raw_input: str = """
Ben Bcool 12
Alice 8
Carol 8,5
Ben Bcool 9
not a number here
Dave 10.5
"""

request = apply_preset(SelectionRequest(target="10"), SelectionPreset.CLASSIC)

# Compute
result = select_winners(raw_input, request, clock=lambda: datetime(2026, 1, 1, 12, 0))

# Inspect
# CLASSIC: 1 winner, keep last duplicate, include ties.
# Ben Bcool keeps the 9 (last occurrence). Distances:
#   Ben 9 -> 1.0, Alice 8 -> 2.0, Carol 8.5 -> 1.5, Dave 10.5 -> 0.5
# Line 6 ("not a number here") is dropped.

print(result.report.winners_text)
print(result.report.differences_text)

# Expected output:
# :W: Dave - 10.5 :W:
# Name: Dave, Difference: 0.50

# Failure example (no exception raised):
# select_winners("Alice 8", SelectionRequest(target="ten", winner_count=0)).failed_fields
# -> ('target', 'winner_count')
