import pytest
from pydantic import ValidationError

from app.models.catalog import Catalog
from app.models.document import UnknownDocument
from app.models.negotiation import ContractNegotiation
from app.models.parsing import parse_document, parse_documents
from app.models.policy import Policy
from app.schemas.asset import AssetForm
from app.schemas.contract import ContractDefinitionForm


def test_policy_accepts_prefixed_rules():
    policy = Policy.model_validate({
        "@id": "policy-1",
        "policy": {"@type": "odrl:Set", "odrl:permission": {"odrl:action": "use"}},
    })

    assert policy.policy.type == "Set"
    assert policy.policy.permission == [{"odrl:action": "use"}]
    assert not policy.policy.is_open


def test_unknown_fields_survive_round_trip():
    raw = {"@id": "asset-1", "@type": "Asset", "properties": {"name": "x", "custom": 1}, "createdAt": 1718000000}

    doc = parse_document("asset", raw)

    assert doc.to_jsonld()["createdAt"] == 1718000000
    assert doc.to_jsonld()["properties"]["custom"] == 1


def test_unknown_kind_falls_back():
    doc = parse_document("edr", {"@id": "edr-1", "endpoint": "http://x"})

    assert isinstance(doc, UnknownDocument)
    assert doc.model_extra["endpoint"] == "http://x"


def test_parse_documents_ignores_non_lists():
    assert parse_documents("asset", {"message": "error"}) == []
    assert parse_documents("asset", None) == []


def test_catalog_single_dataset_is_normalized():
    catalog = Catalog.model_validate({"dcat:dataset": {"@id": "asset-42"}})

    [dataset] = catalog.datasets
    assert dataset.offer is None
    assert dataset.formats == []
    assert dataset.label == "asset-42"


def test_negotiation_transfer_readiness():
    finalized = ContractNegotiation.model_validate({"@id": "n", "state": "FINALIZED", "contractAgreementId": "a"})
    no_agreement = ContractNegotiation.model_validate({"@id": "n", "state": "FINALIZED"})

    assert finalized.can_start_transfer
    assert not no_agreement.can_start_transfer


def test_asset_form_generates_id():
    form = AssetForm(id="  ", name=" Orders ", base_url="https://example.com/orders")

    payload = form.to_payload()

    assert payload["@id"].strip()
    assert payload["properties"]["name"] == "Orders"


def test_asset_form_rejects_unknown_content_type():
    with pytest.raises(ValidationError):
        AssetForm(name="Orders", base_url="https://example.com", content_type="image/png")


def test_contract_form_missing_fields():
    form = ContractDefinitionForm(access_policy_id="p1", contract_policy_id="gone")

    assert form.missing_fields(["p1", "p2"]) == ["contract_policy_id"]
    assert ContractDefinitionForm().missing_fields([]) == ["access_policy_id", "contract_policy_id"]


def test_literals_are_reduced_to_text():
    negotiation = ContractNegotiation.model_validate({
        "@id": {"@id": "neg-1"},
        "@type": ["ContractNegotiation"],
        "state": [{"@value": "TERMINATED"}],
        "contractAgreementId": 7,
    })

    assert negotiation.id == "neg-1"
    assert negotiation.ld_type == ["ContractNegotiation"]
    assert negotiation.is_terminated
    assert not negotiation.is_finalized
    assert negotiation.contract_agreement_id == "7"


def test_rejected_document_falls_back():
    doc = parse_document("policy", {"@id": "policy-1", "policy": "not-a-dict"})

    assert isinstance(doc, UnknownDocument)
    assert doc.id == "policy-1"
    assert doc.to_jsonld()["policy"] == "not-a-dict"


def test_catalog_skips_unreadable_datasets():
    catalog = Catalog.model_validate({
        "@type": ["dcat:Catalog"],
        "dcat:dataset": [{"@id": "asset-1", "@type": ["dcat:Dataset"]}, {"@id": "asset-2", "odrl:hasPolicy": 5}, "asset-3"],
    })

    assert [dataset.id for dataset in catalog.datasets] == ["asset-1"]
