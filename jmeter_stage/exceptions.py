"""Custom exceptions for jmeter-stage."""


class StagingError(Exception):
    """Base exception for all staging errors."""


class ConfigurationError(StagingError):
    """Raised when staging configuration or a resolution manifest is invalid."""


class MissingDependencyError(StagingError):
    """Raised when a required JMeter artifact is absent from the resolved set."""

    def __init__(self, artifact_id: str):
        self.artifact_id = artifact_id
        super().__init__(f"Unable to find artifact '{artifact_id}'!")


class DirectoryCreationError(StagingError):
    """Raised when a working tree directory cannot be created."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Unable to create directory '{path}': {reason}")


class ArchiveExtractionError(StagingError):
    """Raised when the config archive cannot be opened, read or unpacked."""

    def __init__(self, archive_path: str, reason: str, entry: str | None = None):
        self.archive_path = archive_path
        self.entry = entry
        where = f" (entry '{entry}')" if entry else ""
        super().__init__(f"Unable to extract '{archive_path}'{where}: {reason}")


class TreePopulationError(StagingError):
    """Raised when a dependency cannot be copied into the working tree."""

    def __init__(self, coordinate: str, reason: str):
        self.coordinate = coordinate
        super().__init__(
            f"Unable to populate the JMeter directory tree with '{coordinate}': {reason}"
        )


class AdvancedLoggingError(StagingError):
    """Raised when the user-supplied log configuration file cannot be copied."""
