import pytest

from services.hotel.domain import HotelName
from services.shared.domain import ValidationException


class TestHotelName:
    def test_valid_hotel_name(self):
        assert HotelName(value="Grand Hotel").value == "Grand Hotel"

    def test_str_returns_value(self):
        assert str(HotelName(value="Grand Hotel")) == "Grand Hotel"

    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_name_raises_error(self, value):
        with pytest.raises(ValidationException, match="Hotel name cannot be empty"):
            HotelName(value=value)

    def test_too_long_name_raises_error(self):
        with pytest.raises(ValidationException, match="Hotel name is too long"):
            HotelName(value="A" * 101)

    def test_max_length_name_is_valid(self):
        assert len(HotelName(value="A" * 100).value) == 100
