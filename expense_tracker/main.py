import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from expense_tracker.api.routes.auth import router as auth_router
from expense_tracker.api.routes.expenses import router as expenses_router
from expense_tracker.api.routes.user import router as user_router
from expense_tracker.core.config import CORS_ORIGINS, LOG_LEVEL
from expense_tracker.core.errors import ExpenseTrackerError
from expense_tracker.db.database import init_db

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("expense-tracker")

app = FastAPI(title="expense-tracker", version="1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("Database initialized")


@app.exception_handler(ExpenseTrackerError)
async def handle_app_error(request: Request, exc: ExpenseTrackerError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"{field}: {first.get('msg', 'invalid input')}" if field else first.get("msg", "invalid input")
    return JSONResponse(status_code=400, content={"message": message})


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(auth_router)
app.include_router(expenses_router)
app.include_router(user_router)
