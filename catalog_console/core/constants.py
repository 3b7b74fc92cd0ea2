"""App-wide constants."""

# Relationship difficulty scale (related relative to base)
MIN_DIFFICULTY_CHANGE = -3
MAX_DIFFICULTY_CHANGE = 3

# Instruction sections, in header priority and output order
FORM_SECTIONS = ("setup", "execution", "breathing", "alignment")
NUMBERED_FORM_SECTIONS = frozenset({"setup", "execution"})
