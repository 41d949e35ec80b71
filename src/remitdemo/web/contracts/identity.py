"""Identity proxy request contracts.

Moldova identity bodies are forwarded as-is, so only the LV Auth
requests, whose fields are validated locally, are modelled here.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class LvAuthRegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image: Optional[str] = Field(None, description="Base64 face image")
    user_id: Optional[Union[str, int]] = Field(None, alias="userId")
    name: Optional[str] = None


class LvAuthFindRequest(BaseModel):
    image: Optional[str] = Field(None, description="Base64 face image")


class LvAuthDeleteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[Union[str, int]] = Field(None, alias="userId")
