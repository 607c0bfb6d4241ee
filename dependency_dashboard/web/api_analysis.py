"""Analysis API: folder and single-file dependency reports as JSON."""

from __future__ import annotations

import asyncio
from pathlib import Path

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from dependency_dashboard.exceptions import DependencyDashboardError
from dependency_dashboard.models import AnalysisConfig
from dependency_dashboard.pipeline import analyze_folder, analyze_single_file

router = APIRouter(prefix="/api/analysis")


class FolderRequest(BaseModel):
    path: str
    top_n: int = 10


class FileRequest(BaseModel):
    path: str
    target: str


def _scan_root(path: str) -> Path:
    root = Path(path).expanduser()
    if not root.is_dir():
        raise HTTPException(404, f"Directory not found: {path}")
    return root.resolve()


@router.post("/folder")
async def folder_report(req: FolderRequest):
    root = _scan_root(req.path)
    config = AnalysisConfig.from_env(top_n=req.top_n)
    try:
        report = await asyncio.to_thread(analyze_folder, root, config)
    except DependencyDashboardError as e:
        raise HTTPException(400, str(e))
    return report.to_dict()


@router.post("/file")
async def file_report(req: FileRequest):
    root = _scan_root(req.path)
    try:
        report = await asyncio.to_thread(analyze_single_file, req.target, root, AnalysisConfig.from_env())
    except DependencyDashboardError as e:
        raise HTTPException(400, str(e))
    return report.to_dict()
