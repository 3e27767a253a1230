"""
Member ID numbers in format PREFIX-XXXX, e.g. BGR-POL-0001
"""

SEQUENCE_WIDTH = 4


def format_id_number(prefix, sequence):
    """Build the ID number for a surrogate key; keys past 9999 keep all their digits"""
    if sequence < 1:
        raise ValueError(f'Sequence must be positive, got {sequence}')
    return f'{prefix}-{sequence:0{SEQUENCE_WIDTH}d}'
