"""10% random sampling of work-item codes from a QC code range."""
import logging
import math
import random

from qc_tool.constants import SAMPLING_RATE
from qc_tool.services.scoring import new_sample
from qc_tool.utils.exceptions import SamplingError
from qc_tool.utils.validators import QC_CODE_REGEX

logger = logging.getLogger(__name__)


def split_code(code):
    """Split ``Altrum/007`` into ``('Altrum/', '007')``. Returns None without a numeric suffix."""
    match = QC_CODE_REGEX.match(code)
    if not match:
        return None
    return match.group('prefix'), match.group('number')


def _bounds(start_parts, end_parts):
    start_num, end_num = int(start_parts[1]), int(end_parts[1])
    return min(start_num, end_num), max(start_num, end_num)


def code_in_range(code, start_code, end_code):
    """True when ``code`` has the range prefix and a number between the two endpoints."""
    parts = split_code((code or '').strip())
    start_parts = split_code(start_code.strip())
    end_parts = split_code(end_code.strip())
    if not parts or not start_parts or not end_parts or parts[0] != start_parts[0]:
        return False
    low, high = _bounds(start_parts, end_parts)
    return low <= int(parts[1]) <= high


def sample_size(range_size, rate=SAMPLING_RATE):
    # 30 * 0.1 is 3.0000000000000004 in floating point
    return max(1, math.ceil(round(range_size * rate, 9)))


def generate_samples(start_code, end_code, rng=None):
    """Draw distinct codes uniformly from the inclusive range between two codes.

    The start code decides the prefix and the zero-padding width of every
    generated code.
    """
    start_code = (start_code or '').strip()
    end_code = (end_code or '').strip()
    if not start_code or not end_code:
        raise SamplingError('Please enter both start and end QC codes.')

    start_parts = split_code(start_code)
    end_parts = split_code(end_code)
    if not start_parts or not end_parts:
        raise SamplingError('QC codes must end with numeric values (e.g., Altrum/01)')

    prefix, start_digits = start_parts
    if end_parts[0] != prefix:
        raise SamplingError(f'Start and end QC codes must share the same prefix ("{prefix}" vs "{end_parts[0]}")')
    low, high = _bounds(start_parts, end_parts)
    total = high - low + 1
    count = sample_size(total)

    rng = rng or random.SystemRandom()
    numbers = rng.sample(range(low, high + 1), count)
    width = len(start_digits)
    logger.debug('Sampling %d of %d codes between %s and %s', count, total, start_code, end_code)
    return [new_sample(f'{prefix}{str(n).zfill(width)}') for n in numbers]
