"""제출된 사용자 레코드의 Pydantic 스냅샷 모델."""

from datetime import date
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from .enums import Gender, Platform


class SocialProfile(BaseModel):
    """소셜 프로필 스냅샷."""

    platform: Platform = Field(default=Platform.FACEBOOK, description="플랫폼")
    email: str = Field(description="연락 이메일")
    username: str = Field(description="플랫폼 사용자 이름")
    channel_name: str = Field(default="", description="채널 이름 (선택)")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "platform": "YouTube",
                "email": "jane@x.com",
                "username": "janedoe",
                "channel_name": "Jane Cooks",
            }
        },
    )


class UserRecord(BaseModel):
    """검증을 통과한 사용자 레코드 스냅샷."""

    first_name: str
    last_name: str
    date_of_birth: date
    age: int = Field(description="생년월일로부터 계산된 나이")
    address: str
    city: str
    postal_code: str = Field(description="6자리 우편번호")
    tax_id: str = Field(description="PAN 형식 납세자 번호")
    gender: Gender
    education_levels: List[str] = Field(default_factory=list)
    salary: Union[int, float] = Field(ge=0)
    social_profiles: List[SocialProfile] = Field(default_factory=list)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "first_name": "Jane",
                "last_name": "Doe",
                "date_of_birth": "2000-06-15",
                "age": 26,
                "address": "221B Baker Street",
                "city": "London",
                "postal_code": "123456",
                "tax_id": "ABCDE1234F",
                "gender": "female",
                "education_levels": ["Bachelors"],
                "salary": 50000,
                "social_profiles": [
                    {
                        "platform": "Facebook",
                        "email": "jane@x.com",
                        "username": "janedoe",
                        "channel_name": "",
                    }
                ],
            }
        },
    )
