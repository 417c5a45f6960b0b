from .timer_tray import TimerTray

__all__ = ["TimerTray"]
