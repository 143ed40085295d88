from pydantic import BaseModel, ConfigDict, StrictStr
from typing import Optional

SUPPORTED_RECORD_TYPES = ("A", "AAAA", "TXT")

# Shape check only. Membership and content rules are applied afterwards so each
# one gets its own error message.
class AttachRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    record_type: StrictStr
    content: StrictStr
    subdomain: Optional[StrictStr] = None
    secret: Optional[StrictStr] = None
