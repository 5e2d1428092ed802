from app.utils.query_builder import build_query, coerce_value
from app.services.qr.qr_service import ALLOWED_FILTER_FIELDS


class TestCoerceValue:
    """Untyped query-string values are normalized to field types"""

    def test_boolean_literals(self):
        assert coerce_value("true") is True
        assert coerce_value("false") is False

    def test_boolean_literals_are_case_sensitive(self):
        assert coerce_value("True") == "True"

    def test_numbers(self):
        assert coerce_value("42") == 42
        assert isinstance(coerce_value("42"), int)
        assert coerce_value("2.5") == 2.5

    def test_plain_strings_pass_through(self):
        assert coerce_value("QR-001") == "QR-001"
        assert coerce_value("https://example.com") == "https://example.com"

    def test_blank_and_non_finite_stay_strings(self):
        assert coerce_value("") == ""
        assert coerce_value("   ") == "   "
        assert coerce_value("nan") == "nan"
        assert coerce_value("inf") == "inf"

    def test_digit_group_underscores_stay_strings(self):
        assert coerce_value("1_000") == "1_000"
        assert coerce_value("1_0.5") == "1_0.5"
        assert build_query({"count": "1_000"}, ALLOWED_FILTER_FIELDS) == {"count": "1_000"}

    def test_non_string_values_untouched(self):
        assert coerce_value(7) == 7
        assert coerce_value(False) is False


class TestBuildQuery:
    def test_only_allowed_fields_survive(self):
        params = {
            "qrCodeId": "ABC",
            "isActive": "true",
            "__proto__": "polluted",
            "$where": "1 == 1",
            "page": "2",
        }
        query = build_query(params, ALLOWED_FILTER_FIELDS)
        assert query == {"qrCodeId": "ABC", "isActive": True}

    def test_missing_and_none_values_are_skipped(self):
        query = build_query({"isUsed": None}, ALLOWED_FILTER_FIELDS)
        assert query == {}

    def test_count_is_numeric(self):
        query = build_query({"count": "3", "isDeleted": "false"}, ALLOWED_FILTER_FIELDS)
        assert query == {"count": 3, "isDeleted": False}

    def test_empty_allow_list_drops_everything(self):
        assert build_query({"qrCodeId": "ABC"}, []) == {}
