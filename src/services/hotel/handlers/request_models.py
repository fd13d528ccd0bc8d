from pydantic import BaseModel, ConfigDict, Field

from services.hotel.domain import HotelCriteria, HotelPatch
from services.shared.domain import PageRequest


class CreateHotelRequest(BaseModel):
    """ホテル登録リクエストモデル"""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=100, examples=["Grand Hotel"])
    address: str | None = None
    city: str | None = None
    state: str | None = None


class UpdateHotelRequest(BaseModel):
    """ホテル更新リクエストモデル（送られた項目のみ更新）"""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    address: str | None = None
    city: str | None = None
    state: str | None = None

    def to_patch(self) -> HotelPatch:
        return HotelPatch(**self.model_dump(exclude_unset=True))


class ListHotelsQuery(BaseModel):
    """ホテル一覧のクエリパラメータ"""

    offset: int = Field(default=0, ge=0)
    limit: int = Field(
        default=PageRequest.DEFAULT_LIMIT, ge=1, le=PageRequest.MAX_LIMIT
    )
    city: str | None = None
    state: str | None = None

    def to_criteria(self) -> HotelCriteria:
        return HotelCriteria(city=self.city, state=self.state)

    def to_page(self) -> PageRequest:
        return PageRequest(offset=self.offset, limit=self.limit)
