"""Endpoints for triggering and monitoring the job-scraping pipeline."""

from fastapi import APIRouter, BackgroundTasks, Depends

from jobseeker.api.deps import get_pipeline_runner
from jobseeker.api.limiter import pipeline_limit
from jobseeker.api.schemas import PipelineTriggerResponse
from jobseeker.errors import PipelineAlreadyRunning
from jobseeker.services import PipelineRunner

router = APIRouter()


@router.get("/status")
def get_status(runner: PipelineRunner = Depends(get_pipeline_runner)):
    """Current pipeline status."""
    return runner.status()


@router.post("/trigger", response_model=PipelineTriggerResponse, dependencies=[Depends(pipeline_limit)])
def trigger_pipeline(
    background_tasks: BackgroundTasks,
    runner: PipelineRunner = Depends(get_pipeline_runner),
):
    """Start a pipeline run in the background."""
    start_time = runner.try_start()
    if start_time is None:
        raise PipelineAlreadyRunning()

    background_tasks.add_task(runner.run)
    return PipelineTriggerResponse(message="Pipeline trigger started", start_time=start_time)
