from __future__ import annotations
"""Flask web app wrapping the sortbench runner.

Serves the algorithm picker, runs batches synchronously for JSON callers and
as background jobs (with polling and server-sent progress) for the browser.
"""
import json
import logging
import sys
import threading
import time
import uuid
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from flask import Flask, Response, jsonify, render_template, request

_HERE = Path(__file__).resolve()
try:
    _PROJECT_ROOT = next(p for p in _HERE.parents if (p / "libs").exists())
except StopIteration:
    _PROJECT_ROOT = _HERE.parents[0]

for rel in (Path("libs/core/src"), Path("apps/cli/src")):
    candidate = _PROJECT_ROOT / rel
    if candidate.exists():
        candidate_str = str(candidate)
        if candidate_str not in sys.path:
            sys.path.append(candidate_str)

from sortbench import BenchmarkRequest, InvalidArgument, list_algorithms, registry, run_benchmark
from sortbench.config import (
    ALLOWED_ARRAY_SIZES,
    ARRAY_SIZE_LABELS,
    DEFAULT_ARRAY_SIZE,
    SELECT_ALL,
    configure_logging,
)

app = Flask(__name__, template_folder="../templates")

log = logging.getLogger(__name__)


# ---------------- Progress/job management (SSE) ----------------

Jobs: Dict[str, Dict[str, Any]] = {}
JobsLock = threading.Lock()


def _new_job() -> str:
    jid = uuid.uuid4().hex
    with JobsLock:
        Jobs[jid] = {
            "status": "pending",
            "percent": 0,
            "stage": "",
            "detail": "",
            "created": time.time(),
            "cancel": threading.Event(),
            "results": [],
            "batch": None,
            "error": None,
        }
    return jid


def _update_job(
    jid: str,
    *,
    percent: int | None = None,
    stage: str | None = None,
    detail: str | None = None,
    status: str | None = None,
    **extra: Any,
) -> None:
    with JobsLock:
        job = Jobs.get(jid)
        if not job:
            return
        if percent is not None:
            # Ensure monotonic non-decreasing percentage
            newp = max(0, min(100, int(percent)))
            job["percent"] = max(int(job.get("percent", 0) or 0), newp)
        if stage is not None:
            job["stage"] = stage
        if detail is not None:
            job["detail"] = detail
        if status is not None:
            job["status"] = status
        job.update(extra)


def _job_snapshot(jid: str) -> Optional[Dict[str, Any]]:
    with JobsLock:
        job = Jobs.get(jid)
        if not job:
            return None
        return {
            "job_id": jid,
            "status": job["status"],
            "percent": job["percent"],
            "stage": job["stage"],
            "detail": job["detail"],
            "results": list(job["results"]),
            "batch": job["batch"],
            "error": job["error"],
        }


def _sse_from_job(jid: str):
    # Stream current job status every 300ms until completion
    last_payload = None
    while True:
        snap = _job_snapshot(jid)
        if snap is None:
            yield f"data: {json.dumps({'status': 'unknown'})}\n\n"
            return
        payload = json.dumps(snap)
        if payload != last_payload:
            yield f"data: {payload}\n\n"
            last_payload = payload
        if snap["status"] in ("done", "error", "cancelled"):
            return
        time.sleep(0.3)


def _parse_request(data: Mapping[str, Any]) -> tuple[int, str]:
    raw_size = data.get("array_size", DEFAULT_ARRAY_SIZE)
    # JSON may carry floats or booleans; only whole numbers are sizes
    if isinstance(raw_size, bool) or (isinstance(raw_size, float) and not raw_size.is_integer()):
        raise InvalidArgument(f"array size {raw_size!r} is not an integer")
    try:
        size = int(raw_size)
    except (TypeError, ValueError):
        raise InvalidArgument(f"array size {raw_size!r} is not an integer") from None
    selection = str(data.get("selection") or SELECT_ALL)
    return size, selection


def _request_data() -> Mapping[str, Any]:
    if request.is_json:
        body = request.get_json(silent=True)
        return body if isinstance(body, dict) else {}
    return request.form


def _run_job(jid: str, size: int, selection: str) -> None:
    with JobsLock:
        cancel: threading.Event = Jobs[jid]["cancel"]

    def _progress(done: int, total: int, result) -> None:
        with JobsLock:
            Jobs[jid]["results"].append(result.to_dict())
        _update_job(
            jid,
            percent=int(done * 100 / total),
            stage=result.algorithm_name,
            detail=f"{done}/{total}",
        )

    _update_job(jid, status="running")
    try:
        batch = run_benchmark(size, selection, progress=_progress, should_stop=cancel.is_set)
    except Exception as e:
        log.exception("benchmark job %s failed", jid)
        _update_job(jid, status="error", error=str(e))
        return
    _update_job(
        jid,
        percent=100,
        status="cancelled" if batch.cancelled else "done",
        batch=batch.to_dict(),
    )


@app.route("/")
def index():
    return render_template(
        "index.html",
        algorithms=list_algorithms(),
        sizes=[(s, ARRAY_SIZE_LABELS.get(s, str(s))) for s in ALLOWED_ARRAY_SIZES],
        default_size=DEFAULT_ARRAY_SIZE,
    )


@app.route("/health")
def health():
    return jsonify({"status": "ok"})


@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({"algorithms": list_algorithms(), "array_sizes": list(ALLOWED_ARRAY_SIZES)})


@app.route("/api/benchmark", methods=["POST"])
def api_benchmark():
    try:
        size, selection = _parse_request(_request_data())
        batch = run_benchmark(size, selection)
    except InvalidArgument as e:
        return jsonify({"error": "invalid-argument", "message": str(e)}), 400
    return jsonify(batch.to_dict())


@app.route("/execute_async", methods=["POST"])
def execute_async():
    try:
        size, selection = _parse_request(_request_data())
        # Validate before spawning so bad input never creates a job
        BenchmarkRequest.from_selection(size, selection).validate(registry.list())
    except InvalidArgument as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    jid = _new_job()
    t = threading.Thread(target=_run_job, args=(jid, size, selection), daemon=True)
    t.start()
    return jsonify({"ok": True, "job_id": jid})


@app.route("/job/<jid>")
def job_status(jid: str):
    snap = _job_snapshot(jid)
    if snap is None:
        return jsonify({"error": "unknown-job", "job_id": jid}), 404
    return jsonify(snap)


@app.route("/job/<jid>/cancel", methods=["POST"])
def job_cancel(jid: str):
    with JobsLock:
        job = Jobs.get(jid)
        if not job:
            return jsonify({"error": "unknown-job", "job_id": jid}), 404
        job["cancel"].set()
    return jsonify({"ok": True, "job_id": jid})


@app.route("/progress/<jid>")
def progress_stream(jid: str):
    return Response(_sse_from_job(jid), mimetype="text/event-stream")


if __name__ == "__main__":
    configure_logging()
    app.run(debug=False)
