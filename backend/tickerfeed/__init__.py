"""Real-time ticker fan-out over WebSockets.

Public API:
    PriceRecord           - Immutable quote snapshot dataclass
    PriceStore            - Abstract interface for price owners
    SimulatedPriceStore   - Random-walk PriceStore implementation
    SubscriptionRegistry  - Per-client symbol sets and the derived active set
    ConnectionManager     - Client sessions and the message protocol
    Broadcaster           - Targeted delivery of ticker messages
    TickScheduler         - Periodic advance-and-broadcast driver
    TickerHub             - Composition of all of the above
    Settings              - Environment-driven configuration
    create_app            - FastAPI application factory
"""

from .broadcaster import Broadcaster
from .config import Settings
from .connections import ConnectionManager
from .hub import TickerHub
from .interface import PriceStore
from .main import create_app
from .models import PriceRecord
from .registry import SubscriptionRegistry
from .scheduler import TickScheduler
from .simulator import SimulatedPriceStore

__all__ = [
    "Broadcaster",
    "ConnectionManager",
    "PriceRecord",
    "PriceStore",
    "Settings",
    "SimulatedPriceStore",
    "SubscriptionRegistry",
    "TickScheduler",
    "TickerHub",
    "create_app",
]
