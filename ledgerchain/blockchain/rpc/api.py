# MIT License
# Copyright (c) 2025 Hashborn

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from typing import Optional
from prometheus_client import CONTENT_TYPE_LATEST
from ...protocol.types.common import (
    LedgerError,
    AccountNotFound,
    BlockNotFound,
    NoCommittedBlock,
    AccountAlreadyExists,
    DuplicateTransactionId,
    IntegrityError,
    TxStatus,
)
from ..core.ledger import Ledger
from ..observability.metrics import export_metrics
from ... import api as ledger_api
import logging

logger = logging.getLogger(__name__)

app = FastAPI(title="LedgerChain RPC")

# Injected by `ledgerchain serve`
ledger: Optional[Ledger] = None

class AccountRequest(BaseModel):
    address: str

class TxRequest(BaseModel):
    id: str
    amount: int
    fee: int
    note: str = ""
    payer: str
    receiver: str

class TxResponse(BaseModel):
    id: str
    status: str

def _status_code(err: LedgerError) -> int:
    if isinstance(err, (AccountNotFound, BlockNotFound, NoCommittedBlock)):
        return 404
    if isinstance(err, (AccountAlreadyExists, DuplicateTransactionId)):
        return 409
    if isinstance(err, IntegrityError):
        return 422
    return 400

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(
        status_code=_status_code(exc),
        content={"operation": exc.operation, "reason": exc.reason, "code": exc.code},
    )

def _ledger() -> Ledger:
    if not ledger:
        raise HTTPException(status_code=503, detail="Ledger not initialized")
    return ledger

@app.get("/status")
async def get_status():
    lg = _ledger()
    with lg.lock:
        return {
            "name": lg.name,
            "description": lg.description,
            "profile": lg.config.profile,
            "height": lg.height,
            "working_block": lg.working_block.number,
            "pending": lg.working_block.size,
        }

@app.post("/accounts")
async def create_account(req: AccountRequest):
    account = ledger_api.create_account(_ledger(), req.address)
    return {"address": account.address, "balance": account.balance}

@app.post("/transactions", response_model=TxResponse)
async def submit_transaction(req: TxRequest):
    lg = _ledger()
    with lg.lock:
        tx_id = ledger_api.submit_transaction(
            lg, req.id, req.amount, req.fee, req.note, req.payer, req.receiver
        )
        _, block_number = lg.find_transaction(tx_id)
    status = TxStatus.PENDING if block_number is None else TxStatus.COMMITTED
    return TxResponse(id=tx_id, status=status.value)

@app.get("/balance/{address}")
async def get_balance(address: str):
    balance = ledger_api.get_balance(_ledger(), address)
    return {"address": address, "balance": balance}

@app.get("/balances")
async def get_balances():
    balances = ledger_api.get_all_balances(_ledger())
    return {"committed": balances is not None, "balances": balances or {}}

@app.get("/block/{number}")
async def get_block(number: int):
    return ledger_api.get_block(_ledger(), number)

@app.get("/transaction/{tx_id}")
async def get_transaction(tx_id: str):
    found = _ledger().find_transaction(tx_id)
    if not found:
        raise HTTPException(status_code=404, detail="Transaction not found")
    tx, block_number = found
    status = TxStatus.PENDING if block_number is None else TxStatus.COMMITTED
    return {"transaction": tx, "status": status.value, "block": block_number}

@app.get("/validate")
async def validate(verify_hashes: bool = False):
    ledger_api.validate(_ledger(), verify_hashes=verify_hashes)
    return {"valid": True}

@app.get("/metrics")
async def metrics():
    return Response(content=export_metrics(ledger), media_type=CONTENT_TYPE_LATEST)
