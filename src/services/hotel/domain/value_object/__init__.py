from .hotel_id import HotelId as HotelId
from .hotel_name import HotelName as HotelName
