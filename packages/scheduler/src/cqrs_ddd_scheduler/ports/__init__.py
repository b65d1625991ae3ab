from .job_repository import IJobRepository

__all__ = ["IJobRepository"]
