import pytest

from services.hotel.domain import Hotel, HotelId, HotelName


@pytest.fixture
def create_hotel():
    """Hotel を生成する Factory fixture（Factories as fixtures パターン）"""

    def _factory(
        hotel_id: str = "hotel-1",
        name: str = "Grand Hotel",
        address: str | None = "1-1 Marunouchi",
        city: str | None = "Tokyo",
        state: str | None = "Tokyo-to",
        version: int = 0,
    ) -> Hotel:
        return Hotel(
            id=HotelId(value=hotel_id),
            name=HotelName(value=name),
            address=address,
            city=city,
            state=state,
            version=version,
        )

    return _factory
