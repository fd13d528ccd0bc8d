from __future__ import annotations

from pydantic import BaseModel

from services.hotel.domain import Hotel


class HotelData(BaseModel):
    """ホテルデータのレスポンスモデル"""

    id: str
    name: str
    address: str | None
    city: str | None
    state: str | None


def to_data(hotel: Hotel) -> dict:
    """Hotel エンティティをレスポンス辞書に変換する"""
    return HotelData(
        id=str(hotel.id),
        name=str(hotel.name),
        address=hotel.address,
        city=hotel.city,
        state=hotel.state,
    ).model_dump(mode="json")
