"""Per-vendor response delay statistics."""

from typing import Optional


class DelayAccumulator:
    """Append-only record of response delays (in days) per vendor."""

    def __init__(self) -> None:
        self._delays: dict[str, list[int]] = {}

    def add(self, vendor: str, delay: int) -> None:
        self._delays.setdefault(vendor, []).append(delay)

    def vendors(self) -> list[str]:
        """Vendors in the order they first recorded a delay."""
        return list(self._delays)

    def delays(self, vendor: str) -> list[int]:
        return list(self._delays.get(vendor, []))

    def all_delays(self) -> list[int]:
        total: list[int] = []
        for delays in self._delays.values():
            total.extend(delays)
        return total

    def average(self, vendor: str) -> Optional[int]:
        """Truncated mean delay for a vendor, None if it has no delays."""
        return truncated_mean(self._delays.get(vendor, []))

    def averages(self) -> dict[str, int]:
        result: dict[str, int] = {}
        for vendor in self._delays:
            avg = self.average(vendor)
            if avg is not None:
                result[vendor] = avg
        return result

    def total_average(self) -> Optional[int]:
        return truncated_mean(self.all_delays())


def truncated_mean(values: list[int]) -> Optional[int]:
    """Arithmetic mean truncated to an int; None for an empty list."""
    if not values:
        return None
    return sum(values) // len(values)
