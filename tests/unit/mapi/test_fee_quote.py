"""Unit tests for mapi.fee_quote module.

Tests:
- FeePayload decoding from wire format
- compute_fee() / FeePayload.calculate_fee() arithmetic and edge cases
- Parameter validation ahead of any schedule lookup
- FeeQuote helpers
"""

import warnings
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from minercraft.core.exceptions import (
    EmptyScheduleError,
    FeeTypeNotFoundError,
    UnrecognizedParameterError,
    ZeroFeeWarning,
)
from minercraft.mapi import (
    FeeAmount,
    FeePayload,
    FeeQuote,
    compute_fee,
    parse_envelope,
    validate_fee_parameters,
)
from minercraft.models import FeeCategory, FeeType, Miner
from tests.conftest import make_body, make_fee_payload


def _schedule(**kwargs: object) -> FeePayload:
    return FeePayload.from_dict(make_fee_payload(**kwargs))  # type: ignore[arg-type]


# =============================================================================
# Decoding Tests
# =============================================================================


class TestFeePayloadDecoding:
    """FeePayload construction from wire-format dicts."""

    def test_fields(self) -> None:
        payload = _schedule()

        assert payload.api_version == "0.1.0"
        assert payload.current_highest_block_height == 655874
        assert payload.miner_reputation is None
        assert [f.fee_type for f in payload.fees] == ["standard", "data"]
        assert payload.fees[0].relay_fee == FeeAmount(satoshis=250, bytes=1000)

    def test_null_members_use_defaults(self) -> None:
        payload = FeePayload.from_dict({"apiVersion": None, "fees": None})
        assert payload.api_version == ""
        assert payload.fees == ()

    def test_reputation_preserved_verbatim(self) -> None:
        reputation = {"score": 9, "history": [1, 2, {"x": None}]}
        payload = FeePayload.from_dict(make_fee_payload(minerReputation=reputation))
        assert payload.miner_reputation == reputation

    def test_unknown_keys_ignored(self) -> None:
        payload = FeePayload.from_dict(make_fee_payload(somethingNew=True))
        assert not hasattr(payload, "something_new")

    def test_zero_denominator_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FeeAmount(satoshis=1, bytes=0)

    def test_negative_satoshis_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FeeAmount(satoshis=-1, bytes=1000)

    def test_to_dict_round_trips_wire_names(self) -> None:
        data = _schedule().to_dict()
        assert data["fees"][0]["miningFee"] == {"satoshis": 500, "bytes": 1000}
        assert "minerReputation" not in data

    def test_frozen(self) -> None:
        payload = _schedule()
        with pytest.raises(ValidationError):
            payload.api_version = "9.9.9"  # type: ignore[misc]


# =============================================================================
# Fee Arithmetic Tests
# =============================================================================


class TestComputeFee:
    """Fee arithmetic."""

    def test_standard_mining_reference(self) -> None:
        assert _schedule().calculate_fee("mining", "standard", 1000) == 500

    def test_relay_rate(self) -> None:
        assert _schedule().calculate_fee("relay", "standard", 1000) == 250

    def test_data_rate(self) -> None:
        assert _schedule(data=(1000, 1000)).calculate_fee("mining", "data", 1000) == 1000

    def test_floor_division(self) -> None:
        assert _schedule(standard=(500, 1000)).calculate_fee("mining", "standard", 333) == 166

    def test_module_function_matches_method(self) -> None:
        schedule = _schedule()
        assert compute_fee(schedule, "mining", "standard", 250) == schedule.calculate_fee(
            "mining", "standard", 250
        )

    def test_deterministic(self) -> None:
        schedule = _schedule(standard=(37, 19))
        results = {schedule.calculate_fee("mining", "standard", 12345) for _ in range(20)}
        assert results == {(37 * 12345) // 19}

    @pytest.mark.parametrize(
        ("category", "fee_type"),
        [("MINING", "Standard"), ("Relay", "DATA"), (FeeCategory.MINING, FeeType.DATA)],
    )
    def test_case_insensitive(self, category: str, fee_type: str) -> None:
        assert _schedule().calculate_fee(category, fee_type, 1000) > 0

    def test_fee_type_tag_matched_case_insensitively(self) -> None:
        raw = make_fee_payload()
        raw["fees"][0]["feeType"] = "STANDARD"
        assert FeePayload.from_dict(raw).calculate_fee("mining", "standard", 1000) == 500

    def test_duplicate_tags_first_wins(self) -> None:
        raw = make_fee_payload()
        raw["fees"].append(
            {
                "feeType": "standard",
                "miningFee": {"satoshis": 1, "bytes": 1000},
                "relayFee": {"satoshis": 1, "bytes": 1000},
            }
        )
        assert FeePayload.from_dict(raw).calculate_fee("mining", "standard", 1000) == 500

    def test_zero_result_becomes_one_with_warning(self) -> None:
        schedule = _schedule(standard=(1, 1000))

        with pytest.warns(ZeroFeeWarning, match="fee calculation was 0"):
            fee = schedule.calculate_fee("mining", "standard", 10)

        assert fee == 1

    def test_zero_rate_becomes_one(self) -> None:
        schedule = _schedule(standard=(0, 1000))
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ZeroFeeWarning)
            assert schedule.calculate_fee("mining", "standard", 1000) == 1

    def test_zero_bytes_becomes_one(self) -> None:
        with pytest.warns(ZeroFeeWarning):
            assert _schedule().calculate_fee("mining", "standard", 0) == 1

    def test_missing_fee_type(self) -> None:
        schedule = FeePayload.from_dict({"fees": make_fee_payload()["fees"][:1]})

        with pytest.raises(FeeTypeNotFoundError) as exc_info:
            schedule.calculate_fee("mining", "data", 1000)

        assert exc_info.value.fee_type == "data"
        assert exc_info.value.fee == 1

    def test_empty_schedule(self) -> None:
        with pytest.raises(FeeTypeNotFoundError):
            FeePayload().calculate_fee("mining", "standard", 1000)


# =============================================================================
# Parameter Validation Tests
# =============================================================================


class TestParameterValidation:
    """Unknown parameters are rejected before the schedule is scanned."""

    def test_unknown_fee_type(self) -> None:
        schedule = MagicMock(spec=FeePayload)

        with pytest.raises(UnrecognizedParameterError, match="feeType bogus"):
            compute_fee(schedule, "mining", "bogus", 1000)

        schedule.find_fee.assert_not_called()

    def test_unknown_category(self) -> None:
        schedule = MagicMock(spec=FeePayload)

        with pytest.raises(UnrecognizedParameterError, match="feeCategory bogus"):
            compute_fee(schedule, "bogus", "standard", 1000)

        schedule.find_fee.assert_not_called()

    def test_unknown_fee_type_on_empty_schedule(self) -> None:
        with pytest.raises(UnrecognizedParameterError):
            FeePayload().calculate_fee("mining", "bogus", 1000)

    def test_non_string_parameter(self) -> None:
        with pytest.raises(UnrecognizedParameterError):
            validate_fee_parameters("mining", None)  # type: ignore[arg-type]

    @pytest.mark.parametrize("tx_bytes", [-1, 1.5, True])
    def test_invalid_tx_bytes(self, tx_bytes: object) -> None:
        with pytest.raises(UnrecognizedParameterError, match="txBytes"):
            _schedule().calculate_fee("mining", "standard", tx_bytes)  # type: ignore[arg-type]

    def test_validate_returns_enums(self) -> None:
        assert validate_fee_parameters("Relay", "Data") == (FeeCategory.RELAY, FeeType.DATA)


# =============================================================================
# FeeQuote Tests
# =============================================================================


class TestFeeQuote:
    """FeeQuote helpers."""

    def test_calculate_fee_delegates(self, taal: Miner) -> None:
        quote = FeeQuote.from_body(taal, make_body(make_fee_payload()))
        assert quote.calculate_fee("mining", "standard", 2000) == 1000

    def test_empty_quote(self, taal: Miner) -> None:
        quote = FeeQuote(miner=taal, envelope=parse_envelope(b'{"payload": ""}'))

        assert quote.quote is None
        assert quote.has_fees is False
        with pytest.raises(EmptyScheduleError, match="Taal"):
            quote.calculate_fee("mining", "standard", 1000)

    def test_has_fees_false_for_empty_list(self, taal: Miner) -> None:
        quote = FeeQuote.from_body(taal, make_body({"apiVersion": "0.1.0", "fees": []}))
        assert quote.quote is not None
        assert quote.has_fees is False
