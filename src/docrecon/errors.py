class DocReconError(Exception):
    """Base class for every error the package raises on purpose."""


class IngestError(DocReconError):
    """An input file could not be turned into a dataset."""


class ConfigError(DocReconError):
    """A mapping or tolerance config file is malformed."""


class MappingError(DocReconError):
    """The field mappings cannot drive a reconciliation."""


class NoReferenceMappingError(MappingError):
    def __init__(self) -> None:
        super().__init__("No reference field selected. Mark exactly one mapping as the reference key.")


class MultipleReferenceMappingsError(MappingError):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"{count} mappings are marked as reference; exactly one is allowed.")
