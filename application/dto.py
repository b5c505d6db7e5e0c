"""
数据传输对象（DTO）- 特征数据集记录
"""
from pydantic import BaseModel, ConfigDict, Field, StrictInt


class DTOBase(BaseModel):
    """Base DTO: dataset records may carry keys we do not use."""

    model_config = ConfigDict(extra="ignore", frozen=True)


# Point fields are int32 on the wire
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class LocationDTO(DTOBase):
    """Fixed-point coordinates (degrees * 10**7)"""
    latitude: StrictInt = Field(..., ge=INT32_MIN, le=INT32_MAX, description="纬度 * 1e7")
    longitude: StrictInt = Field(..., ge=INT32_MIN, le=INT32_MAX, description="经度 * 1e7")


class FeatureRecordDTO(DTOBase):
    """One `{name, location: {latitude, longitude}}` record of the feature database."""
    name: str = Field(default="", description="特征名称，空字符串表示该位置没有特征")
    location: LocationDTO
