from .hotel_repository import HotelCriteria as HotelCriteria
from .hotel_repository import HotelRepository as HotelRepository
