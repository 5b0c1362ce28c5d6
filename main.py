from functools import lru_cache

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from error_utils import AppError, error_type_to_status_code
from logger import setup_logger
from models import ApplyResult, Voucher, VoucherApplyRequest, VoucherCreate
from voucher_repository import FirebaseVoucherRepository, InMemoryVoucherRepository
from voucher_service import VoucherService

logger = setup_logger()

app = FastAPI(title="Voucher API")

# 🔐 Allow frontend CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_voucher_service() -> VoucherService:
    store = config.voucher_store()
    if store == "memory":
        repository = InMemoryVoucherRepository()
    elif store == "firebase":
        repository = FirebaseVoucherRepository()
    else:
        raise ValueError(f"Unknown VOUCHER_STORE: {store!r} (expected 'memory' or 'firebase')")

    logger.info("Voucher store: %s", store)
    return VoucherService(repository)


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    return JSONResponse(
        status_code=error_type_to_status_code(exc.type),
        content={"detail": exc.message},
    )


# Rejected values are not echoed back: Infinity or NaN would not serialize
@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    errors = [{k: v for k, v in error.items() if k != "input"} for error in exc.errors()]
    return JSONResponse(
        status_code=error_type_to_status_code("wrong_schema"),
        content={"detail": jsonable_encoder(errors)},
    )


# 🎯 1. CREATE VOUCHER
@app.post("/vouchers", response_model=Voucher, status_code=status.HTTP_201_CREATED)
def create_voucher(body: VoucherCreate, service: VoucherService = Depends(get_voucher_service)):
    return service.create_voucher(body.code, body.discount)


# 🎯 2. APPLY VOUCHER
@app.post("/vouchers/apply", response_model=ApplyResult)
def apply_voucher(body: VoucherApplyRequest, service: VoucherService = Depends(get_voucher_service)):
    return service.apply_voucher(body.code, body.amount)
