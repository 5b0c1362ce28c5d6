from pydantic import BaseModel, Field

class Voucher(BaseModel):
    id: int
    code: str
    discount: float
    used: bool = False

class VoucherCreate(BaseModel):
    code: str = Field(..., min_length=1)
    discount: float = Field(..., ge=0, le=100, allow_inf_nan=False)

class VoucherApplyRequest(BaseModel):
    code: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, allow_inf_nan=False)

class ApplyResult(BaseModel):
    amount: float
    discount: float = 0
    finalAmount: float
    applied: bool = False
