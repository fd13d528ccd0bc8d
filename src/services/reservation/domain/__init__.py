from .entity import Reservation as Reservation
from .entity import ReservationPatch as ReservationPatch
from .entity import RoomSchedule as RoomSchedule
from .factory import ReservationDetails as ReservationDetails
from .factory import ReservationFactory as ReservationFactory
from .repository import ReservationCriteria as ReservationCriteria
from .repository import ReservationRepository as ReservationRepository
from .value_object import ReservationId as ReservationId
from .value_object import StayPeriod as StayPeriod
