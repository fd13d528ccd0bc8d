from .reservation_id import ReservationId as ReservationId
from .stay_period import StayPeriod as StayPeriod
