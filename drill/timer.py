from typing import Callable, List


class TimerHandle:
    """
    Handle of one periodic callback registered in a TickScheduler.

    cancel() is idempotent; a cancelled handle never fires again,
    even if it was already due in the current pump().
    """

    def __init__(self, callback: Callable[[int], None], interval_ms: int, next_fire_ms: int) -> None:
        self.callback = callback
        self.interval_ms = interval_ms
        self.next_fire_ms = next_fire_ms
        self.active: bool = True

    def cancel(self) -> None:
        self.active = False


class TickScheduler:
    """
    Periodic timers driven by the frame loop.

    The game loop calls pump(now_ms) every frame, the same way tasks
    are updated with pygame.time.get_ticks().
    """

    def __init__(self) -> None:
        self._handles: List[TimerHandle] = []

    def every(self, interval_ms: int, callback: Callable[[int], None], now_ms: int) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        handle = TimerHandle(callback, interval_ms, now_ms + interval_ms)
        self._handles.append(handle)
        return handle

    def pump(self, now_ms: int) -> int:
        fired = 0
        for handle in list(self._handles):
            # catch up if frames lagged behind the interval
            while handle.active and now_ms >= handle.next_fire_ms:
                handle.next_fire_ms += handle.interval_ms
                handle.callback(now_ms)
                fired += 1
        self._handles = [h for h in self._handles if h.active]
        return fired

    def cancel_all(self) -> None:
        for handle in self._handles:
            handle.cancel()
        self._handles = []

    def active_count(self) -> int:
        return sum(1 for h in self._handles if h.active)
