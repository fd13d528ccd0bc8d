from .reservation_factory import ReservationDetails as ReservationDetails
from .reservation_factory import ReservationFactory as ReservationFactory
