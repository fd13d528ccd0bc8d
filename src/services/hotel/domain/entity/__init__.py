from .hotel import Hotel as Hotel
from .hotel import HotelPatch as HotelPatch
