import pytest

from app.utils.booking_validation import (
    BookingValidationError,
    generate_time_slots,
    normalize_phone,
    validate_national_code,
    validate_time_slot,
)


class TestTimeSlots:

    def test_default_slots_cover_day(self):
        slots = generate_time_slots()
        assert slots[0] == "08:00"
        assert slots[1] == "08:30"
        assert slots[-1] == "23:30"
        assert len(slots) == 32

    def test_custom_range(self):
        assert generate_time_slots(9, 11, 60) == ["09:00", "10:00"]

    def test_validate_time_slot(self):
        validate_time_slot("10:30")
        with pytest.raises(BookingValidationError):
            validate_time_slot("10:15")
        with pytest.raises(BookingValidationError):
            validate_time_slot("07:30")


class TestNationalCode:

    @pytest.mark.parametrize("code", ["0499370899", "1234567891"])
    def test_valid_codes(self, code):
        assert validate_national_code(code) == code

    def test_persian_digits_are_converted(self):
        assert validate_national_code("۰۴۹۹۳۷۰۸۹۹") == "0499370899"

    def test_bad_check_digit(self):
        with pytest.raises(BookingValidationError):
            validate_national_code("1234567890")

    @pytest.mark.parametrize("code", ["123", "12345678901", "12345abcde", "049937089²", "²²²²²²²²²²"])
    def test_wrong_shape(self, code):
        with pytest.raises(BookingValidationError):
            validate_national_code(code)


class TestPhone:

    def test_strips_separators(self):
        assert normalize_phone("0912 123 4567") == "09121234567"

    def test_persian_digits(self):
        assert normalize_phone("۰۹۱۲۱۲۳۴۵۶۷") == "09121234567"

    def test_wrong_length(self):
        with pytest.raises(BookingValidationError):
            normalize_phone("0912123")

    def test_superscript_digits_are_not_digits(self):
        with pytest.raises(BookingValidationError):
            normalize_phone("0912123456²")
