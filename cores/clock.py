from django.utils import timezone


class SystemClock:
    """Wall-clock time source handed to the services; tests swap in their own."""

    def now(self):
        return timezone.now()


system_clock = SystemClock()
