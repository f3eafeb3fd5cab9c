"""Custom exceptions for the TPU admission webhook."""

from typing import Any, Optional


class WebhookError(Exception):
    """Base exception for webhook errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class AdmissionDecodeError(WebhookError):
    """Raised when the request body is not a usable AdmissionReview."""

    def __init__(self, message: str = "Error decoding request body") -> None:
        super().__init__(message, status_code=400)


class UnexpectedKindError(WebhookError):
    """Raised when an object of one kind is decoded as another."""

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"Expected {expected} but got {actual}",
            status_code=400,
            details={"expected_kind": expected, "kind": actual},
        )


class ObjectDecodeError(WebhookError):
    """Raised when the embedded object does not match the expected schema."""

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(
            f"Could not decode {kind}: {reason}",
            status_code=400,
            details={"kind": kind},
        )


class MissingNodePoolLabelError(WebhookError):
    """Raised when a pod has no node pool label, so its slice is unknown."""

    def __init__(self, label: str, pod_name: Optional[str] = None) -> None:
        super().__init__(
            f"Pod {pod_name or '<unnamed>'} is missing node pool label {label}",
            status_code=422,
            details={"label": label, "pod": pod_name},
        )


class MissingPodIdentityError(WebhookError):
    """Raised when a pod carries neither generateName nor name."""

    def __init__(self, node_pool: str) -> None:
        super().__init__(
            "Pod has neither metadata.generateName nor metadata.name",
            status_code=422,
            details={"node_pool": node_pool},
        )
