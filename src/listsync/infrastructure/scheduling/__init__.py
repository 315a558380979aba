from .qt_scheduler import QtTimerScheduler

__all__ = ["QtTimerScheduler"]
