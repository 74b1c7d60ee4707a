"""Unit tests for the minercraft exception hierarchy.

Tests verify:
- issubclass relationships match the documented tree
- except clauses catch the expected subclasses
- structured attributes on TransportError and FeeTypeNotFoundError
"""

import pytest

from minercraft.core.exceptions import (
    ConfigurationError,
    EmptyScheduleError,
    FeeCalculationError,
    FeeTypeNotFoundError,
    MalformedEnvelopeError,
    MalformedPayloadError,
    MinercraftError,
    ProtocolError,
    SignatureError,
    SignatureInvalidError,
    TransportError,
    UnrecognizedParameterError,
    VerifierError,
    ZeroFeeWarning,
)


ALL_MESSAGE_ONLY = (
    ConfigurationError,
    MalformedEnvelopeError,
    MalformedPayloadError,
    EmptyScheduleError,
    SignatureInvalidError,
    VerifierError,
    UnrecognizedParameterError,
)


# =============================================================================
# Hierarchy Tests
# =============================================================================


class TestExceptionHierarchy:
    """Verify issubclass relationships match the documented tree."""

    @pytest.mark.parametrize(
        "exc_cls",
        [*ALL_MESSAGE_ONLY, TransportError, FeeTypeNotFoundError],
    )
    def test_all_inherit_from_minercraft_error(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, MinercraftError)

    @pytest.mark.parametrize(
        "exc_cls", [MalformedEnvelopeError, MalformedPayloadError, EmptyScheduleError]
    )
    def test_decoding_errors_are_protocol_errors(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, ProtocolError)

    @pytest.mark.parametrize("exc_cls", [SignatureInvalidError, VerifierError])
    def test_signature_errors(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, SignatureError)

    @pytest.mark.parametrize("exc_cls", [UnrecognizedParameterError, FeeTypeNotFoundError])
    def test_fee_calculation_errors(self, exc_cls: type) -> None:
        assert issubclass(exc_cls, FeeCalculationError)

    def test_zero_fee_warning_is_not_an_error(self) -> None:
        assert issubclass(ZeroFeeWarning, UserWarning)
        assert not issubclass(ZeroFeeWarning, MinercraftError)


# =============================================================================
# Catch Tests
# =============================================================================


class TestCatching:
    """except clauses on base classes catch their subclasses."""

    def test_protocol_error_catches_empty_schedule(self) -> None:
        with pytest.raises(ProtocolError):
            raise EmptyScheduleError("no fees")

    def test_base_catches_transport_error(self) -> None:
        with pytest.raises(MinercraftError):
            raise TransportError("Taal", "HTTP 503, expected 200")

    @pytest.mark.parametrize("exc_cls", ALL_MESSAGE_ONLY)
    def test_message_preserved(self, exc_cls: type[MinercraftError]) -> None:
        with pytest.raises(exc_cls, match="boom"):
            raise exc_cls("boom")


# =============================================================================
# Attribute Tests
# =============================================================================


class TestAttributes:
    """Structured attributes carried by specific exceptions."""

    def test_transport_error_fields(self) -> None:
        err = TransportError("Taal", "timeout")
        assert err.miner == "Taal"
        assert err.reason == "timeout"
        assert str(err) == "request to miner Taal failed: timeout"

    def test_fee_type_not_found_fields(self) -> None:
        err = FeeTypeNotFoundError("data")
        assert err.fee_type == "data"
        assert err.fee == 1
        assert str(err) == "feeType data is not found in fees"
