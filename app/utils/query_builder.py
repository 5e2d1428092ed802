from typing import Any, Dict, Iterable, Mapping


def coerce_value(value: Any) -> Any:
    """Normalize an untyped query-string value to a bool, int or float when it looks like one"""
    if not isinstance(value, str):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    text = value.strip()
    # int() and float() accept digit-group underscores; "1_000" is not a number here
    if not text or "_" in text:
        return value
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return value
    # "nan"/"inf" parse as floats but are not numbers a caller meant
    if number != number or number in (float("inf"), float("-inf")):
        return value
    return number


def build_query(raw_params: Mapping[str, Any], allowed_fields: Iterable[str]) -> Dict[str, Any]:
    """
    Translate raw request parameters into a store filter.

    Only keys listed in allowed_fields survive; everything else is dropped
    without error so arbitrary keys can never reach the query.
    """
    query: Dict[str, Any] = {}
    for field in allowed_fields:
        value = raw_params.get(field)
        if value is None:
            continue
        query[field] = coerce_value(value)
    return query
