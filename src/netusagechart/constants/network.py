"""
Constants related to network interfaces and data size units.
"""
from typing import Final, Set, List

class UnitConstants:
    """Constants for byte size formatting."""
    BASE_DATA_SIZE: Final[float] = 1024.0
    DATA_SIZE_UNITS: Final[List[str]] = ["B", "KB", "MB", "GB", "TB", "PB"]

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.BASE_DATA_SIZE <= 1:
            raise ValueError("BASE_DATA_SIZE must be greater than 1")
        if not self.DATA_SIZE_UNITS:
            raise ValueError("DATA_SIZE_UNITS must not be empty")

class InterfaceConstants:
    """Constants for network interface selection."""
    DEFAULT_MODE: Final[str] = "all"
    VALID_INTERFACE_MODES: Final[Set[str]] = {"all", "selected"}
    EXCLUDED_INTERFACE_KEYWORDS: Final[List[str]] = ["loopback", "lo", "pseudo-interface"]
    ALL_INTERFACES_KEY: Final[str] = "all"

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.DEFAULT_MODE not in self.VALID_INTERFACE_MODES:
            raise ValueError(f"DEFAULT_MODE '{self.DEFAULT_MODE}' must be one of {self.VALID_INTERFACE_MODES}")

class NetworkConstants:
    """Container for network-related constant groups."""
    def __init__(self) -> None:
        self.units = UnitConstants()
        self.interface = InterfaceConstants()

# Singleton instance for easy access
network = NetworkConstants()
