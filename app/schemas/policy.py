from typing import Literal
from pydantic import BaseModel

from app.models.policy import open_access_policy
from app.util.edc_helpers import timestamped_id


class PolicyForm(BaseModel):
    # 'custom' has no rule editor yet, so it creates the same empty Set as 'open'
    policy_type: Literal["open", "custom"] = "open"

    def to_payload(self) -> dict:
        return {
            "@id": timestamped_id("policy"),
            "policy": open_access_policy(),
        }
