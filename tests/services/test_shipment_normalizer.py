"""Tests for payer role and shipment payload normalization."""

from datetime import date

import pytest

from speedy_proxy.services.shipment_normalizer import (
    normalize_payer_role,
    normalize_shipment,
)

TODAY = date(2026, 3, 14)


class TestNormalizePayerRole:
    """Tests for normalize_payer_role()."""

    @pytest.mark.parametrize(
        "value",
        [
            "contract_client",
            "CONTRACT_CLIENT",
            "Contract-Client",
            "contract client",
            "CONTRACT_CLEINT",
            "Client",
            "",
            None,
            "nobody",
            "PAYER",
            42,
            ["SENDER"],
        ],
    )
    def test_legacy_and_invalid_values_become_sender(self, value):
        assert normalize_payer_role(value) == "SENDER"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("sender", "SENDER"),
            ("SENDER", "SENDER"),
            (" Sender ", "SENDER"),
            ("RECIPIENT", "RECIPIENT"),
            ("recipient", "RECIPIENT"),
            ("Third_Party", "THIRD_PARTY"),
            ("third party", "THIRD_PARTY"),
            ("third-party", "THIRD_PARTY"),
            ("thirdparty", "THIRD_PARTY"),
        ],
    )
    def test_canonical_values_any_case(self, value, expected):
        assert normalize_payer_role(value) == expected


class TestNormalizeShipment:
    """Tests for normalize_shipment()."""

    def test_missing_payment_synthesized(self):
        result = normalize_shipment({"recipient": {"clientName": "Ivan"}}, today=TODAY)
        assert result["payment"] == {"courierServicePayer": "SENDER"}

    def test_none_payload(self):
        result = normalize_shipment(None, today=TODAY)
        assert result == {"payment": {"courierServicePayer": "SENDER"}, "date": "2026-03-14"}

    def test_courier_payer_normalized(self):
        result = normalize_shipment(
            {"payment": {"courierServicePayer": "recipient"}}, today=TODAY
        )
        assert result["payment"]["courierServicePayer"] == "RECIPIENT"

    def test_missing_courier_payer_defaults_to_sender(self):
        result = normalize_shipment({"payment": {"packagePayer": "X"}}, today=TODAY)
        assert result["payment"]["courierServicePayer"] == "SENDER"
        assert result["payment"]["packagePayer"] == "X"

    def test_declared_value_payer_only_when_present(self):
        without = normalize_shipment({"payment": {}}, today=TODAY)
        assert "declaredValuePayer" not in without["payment"]

        with_value = normalize_shipment(
            {"payment": {"declaredValuePayer": "contract_client"}}, today=TODAY
        )
        assert with_value["payment"]["declaredValuePayer"] == "SENDER"

    def test_return_shipment_payer_only_when_present(self):
        payload = {"optionsBeforePayment": {"returnShipmentPayer": "third_party"}}
        result = normalize_shipment(payload, today=TODAY)
        assert result["optionsBeforePayment"]["returnShipmentPayer"] == "THIRD_PARTY"

        untouched = normalize_shipment(
            {"optionsBeforePayment": {"open": True}}, today=TODAY
        )
        assert untouched["optionsBeforePayment"] == {"open": True}

    def test_absent_options_not_synthesized(self):
        result = normalize_shipment({}, today=TODAY)
        assert "optionsBeforePayment" not in result

    def test_date_injected_when_missing(self):
        assert normalize_shipment({}, today=TODAY)["date"] == "2026-03-14"

    def test_existing_date_kept(self):
        result = normalize_shipment({"date": "2026-04-01"}, today=TODAY)
        assert result["date"] == "2026-04-01"

    def test_date_defaults_to_server_today(self):
        result = normalize_shipment({})
        assert result["date"] == date.today().strftime("%Y-%m-%d")

    def test_input_not_mutated(self):
        payload = {
            "payment": {"courierServicePayer": "contract_client"},
            "optionsBeforePayment": {"returnShipmentPayer": "recipient"},
        }
        normalize_shipment(payload, today=TODAY)
        assert payload == {
            "payment": {"courierServicePayer": "contract_client"},
            "optionsBeforePayment": {"returnShipmentPayer": "recipient"},
        }

    def test_non_dict_payment_replaced(self):
        result = normalize_shipment({"payment": "SENDER"}, today=TODAY)
        assert result["payment"] == {"courierServicePayer": "SENDER"}
