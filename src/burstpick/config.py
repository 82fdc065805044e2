from dataclasses import dataclass


class InvalidSettingsError(ValueError):
    """Raised when grouping settings are out of range."""


@dataclass
class GroupingSettings:
    time_threshold_seconds: float = 10.0
    similarity_threshold: float = 0.9
    min_group_size: int = 2
    batch_size: int = 10

    def validate(self) -> "GroupingSettings":
        """Check every field and return self so calls can be chained."""
        if not self.time_threshold_seconds > 0:
            raise InvalidSettingsError(
                f"time_threshold_seconds must be positive, got {self.time_threshold_seconds}"
            )
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise InvalidSettingsError(
                f"similarity_threshold must be within [0, 1], got {self.similarity_threshold}"
            )
        if self.min_group_size < 1:
            raise InvalidSettingsError(
                f"min_group_size must be at least 1, got {self.min_group_size}"
            )
        if self.batch_size < 1:
            raise InvalidSettingsError(
                f"batch_size must be at least 1, got {self.batch_size}"
            )
        return self
