from .reservation_repository import ReservationCriteria as ReservationCriteria
from .reservation_repository import ReservationRepository as ReservationRepository
