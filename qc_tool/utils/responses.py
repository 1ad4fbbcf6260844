from flask import jsonify, Response


def success_response(data=None, message='Success', status_code=200, meta=None):
    """JSON envelope for a successful call."""
    response = {
        'success': True,
        'message': message,
    }
    if data is not None:
        response['data'] = data
    if meta is not None:
        response['meta'] = meta
    return jsonify(response), status_code


def error_response(message='An error occurred', status_code=400, errors=None):
    return jsonify({
        'success': False,
        'message': message,
        'errors': errors or [],
    }), status_code


def flatten_errors(messages, prefix=''):
    """Turn marshmallow's nested error dict into ``[{field, message}]``.

    Nested paths are dotted, e.g. ``sub_samples.0.errors.1``.
    """
    if isinstance(messages, list) and all(isinstance(m, str) for m in messages):
        return [{'field': prefix or '_schema', 'message': m} for m in messages]
    if isinstance(messages, str):
        return [{'field': prefix or '_schema', 'message': messages}]
    flat = []
    if isinstance(messages, dict):
        for key, value in messages.items():
            flat.extend(flatten_errors(value, f'{prefix}.{key}' if prefix else str(key)))
    elif isinstance(messages, list):
        flat.extend(messages)
    return flat


def validation_error(errors, message='Validation failed'):
    """400 response carrying field-level errors."""
    return error_response(message, 400, flatten_errors(errors))


def csv_response(content, filename):
    """CSV download with an attachment disposition."""
    return Response(
        content,
        mimetype='text/csv',
        headers={'Content-Disposition': f'attachment; filename={filename}'},
    )
