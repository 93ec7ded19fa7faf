## Main application entry point
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from learnpath.agents.llm.base import PlannerError
from learnpath.roadmaps.routes import router as roadmaps_router
from learnpath.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="learnpath")

@app.get("/health")
def health():
    return {"status": "ok"}

@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError):
    logger.error("Planner failed for %s: %s", request.url.path, exc)
    return JSONResponse(
        {"error": "planner_unavailable", "details": str(exc)},
        status_code=503,
    )

app.include_router(roadmaps_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("learnpath.main:app", host="0.0.0.0", port=8000)
