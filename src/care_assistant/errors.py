class CareAssistantError(Exception):
    """Base class for errors raised by the extraction core."""


class RemoteUnavailable(CareAssistantError):
    """The remote extraction service could not be used for this call."""


class AdapterParseFailure(CareAssistantError):
    """A remote payload had a shape the response adapter could not read."""


class LocalPipelineFailure(CareAssistantError):
    """The local rule-based extraction faulted; no result can be produced."""
