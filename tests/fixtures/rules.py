"""
Sample rule files for read filter tests.
"""

from __future__ import annotations

# Name line followed by criteria on two stratifiers
QUALITY_AND_MISMATCH = """\
# Exclude low-quality mismatching bases
low_quality_mismatch
# suffix\ttype\tcomparator\tvalue
base_quality\tint\t<\t20
is_mismatch\tboolean\t=\ttrue
"""

# Two criteria on distinct suffixes
THRESHOLD_AND_FLAG = """\
threshold_and_flag
A\tint\t>\t5
B\tboolean\t=\ttrue
"""

# Name only
NAME_ONLY = """\
# nothing but a name

name_only
"""

# Comments and blank lines only
EMPTY = """\
# just a comment

# and another
"""

# Valid criteria around malformed lines
WITH_MALFORMED_LINES = """\
messy
cycle\tint\t>
cycle\tint\t>=\t10
mapping_quality\tint\t<\tabc
mapping_quality\tint\t<\t30
read_direction\tstring\t=\tforward
pair_proper\tboolean\t=\tyes
insert_length\tint\t=<\t100
base_quality\tboolean\t!=\tFALSE
"""

# Mixed domains in one suffix group
MIXED_GROUP = """\
mixed_group
cycle\tint\t>\t0
cycle\tboolean\t=\ttrue
cycle\tint\t<\t100
"""
