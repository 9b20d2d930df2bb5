"""
Middleware for EventBus

Middleware = pipeline functions that process events before handlers.
Can modify events, block events, or log/validate events.
"""

from models.events import Event
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


def log_middleware(event: Event) -> Event:
    """
    Log all events for debugging

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = event.source.name if event.source else None
    data = event.to_data()

    # Rotations are frequent, keep them compact
    if "rotation" in data:
        data_str = f"delta={data['delta']:+.3f} rotation={data['rotation']:.3f}"
    else:
        data_str = ", ".join(f"{k}={v}" for k, v in data.items())

    log.debug(f"Event: {event.type.name} from {source_str} | {data_str}")
    return event
