import re
import bleach

# QC code with a numeric suffix, e.g. Altrum/001 or MF-200
QC_CODE_REGEX = re.compile(r'^(?P<prefix>.*?)(?P<number>\d+)$')


def sanitize_string(value):
    """Strip HTML tags and trim whitespace from string inputs."""
    if not isinstance(value, str):
        return value
    return bleach.clean(value, tags=[], strip=True).strip()


def sanitize_value(value):
    """Sanitize every string inside nested dicts and lists."""
    if isinstance(value, str):
        return sanitize_string(value)
    if isinstance(value, dict):
        return {key: sanitize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [sanitize_value(item) for item in value]
    return value


def sanitize_dict(data):
    """Sanitize a request body. Non-dict bodies are left for the schema to reject."""
    if not isinstance(data, dict):
        return data
    return sanitize_value(data)


def validate_qc_code(value):
    """Return an error message when a QC code has no numeric suffix."""
    if not value:
        return None
    if not QC_CODE_REGEX.match(value.strip()):
        return 'QC codes must end with numeric values (e.g., Altrum/01)'
    return None
