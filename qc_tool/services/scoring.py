"""Per-sample scoring and score aggregation."""
from qc_tool.constants import QC_ERROR_WEIGHTS, MAX_SCORE


def calculate_sample_score(error_ids):
    """100 plus the weight of every tagged error, floored at 0.

    Ids missing from the error catalog contribute nothing.
    """
    score = MAX_SCORE
    for error_id in error_ids or []:
        score += QC_ERROR_WEIGHTS.get(error_id, 0)
    return max(0, score)


def new_sample(qc_code):
    return {'qc_code': qc_code, 'errors': [], 'no_error': True, 'score': MAX_SCORE}


def rescore_sample(sample):
    """Return a copy of ``sample`` with de-duplicated errors and a recomputed score."""
    errors = list(dict.fromkeys(sample.get('errors') or []))
    return {
        'qc_code': sample['qc_code'],
        'errors': errors,
        'no_error': not errors,
        'score': calculate_sample_score(errors),
    }


def toggle_error(sample, error_id):
    """Add ``error_id`` to the sample, or remove it if already tagged."""
    errors = list(sample.get('errors') or [])
    if error_id in errors:
        errors = [e for e in errors if e != error_id]
    else:
        errors.append(error_id)
    return rescore_sample({**sample, 'errors': errors})


def mark_no_error(sample):
    return {**sample, 'errors': [], 'no_error': True, 'score': MAX_SCORE}


def round1(value):
    return float(f'{value:.1f}')


def calculate_average_score(samples, manual_score=None, manual_enabled=False):
    """Mean of the sample scores plus the manual score when manual auditing is on.

    Returns 100 when nothing contributes.
    """
    scores = [s['score'] for s in samples]
    if manual_enabled and manual_score is not None:
        scores.append(manual_score)
    if not scores:
        return float(MAX_SCORE)
    return round1(sum(scores) / len(scores))


def resolve_manual_score(manual_enabled, manual_score=None, manual_errors=None):
    """Manual score to blend into the average, or None when manual auditing is off.

    An explicit score wins; otherwise it is derived from the manual error tags.
    """
    if not manual_enabled:
        return None
    if manual_score is not None:
        return manual_score
    return calculate_sample_score(manual_errors)
