"""Web API routes for ClipCut."""

import json
import queue
import threading
import uuid
from pathlib import Path

from flask import (
    Blueprint,
    Response,
    current_app,
    jsonify,
    request,
    send_file,
)
from werkzeug.utils import secure_filename

from clipcut.engine import export_video
from clipcut.errors import ExportError
from clipcut.logging import logger
from clipcut.manifest import EncodeConfig, ExportRequest, parse_segments
from clipcut.models import MergeTarget, SplitTarget

bp = Blueprint("web", __name__)

# In-memory job store: job_id -> job dict
_jobs: dict[str, dict] = {}

# Longest wait between two stage events, i.e. one segment re-encode.
EXPORT_STAGE_TIMEOUT = 600


def _output_name(name: str, default: str) -> str:
    name = secure_filename(name or "") or default
    return name if name.endswith(".mp4") else f"{name}.mp4"


@bp.route("/api/upload", methods=["POST"])
def upload():
    """Store the source video for a new export job."""
    if "file" not in request.files:
        return jsonify({"error": "No file provided"}), 400

    f = request.files["file"]
    if not f.filename:
        return jsonify({"error": "Empty filename"}), 400

    job_id = uuid.uuid4().hex[:12]
    job_dir = Path(current_app.config["WORK_DIR"]) / job_id
    job_dir.mkdir(parents=True, exist_ok=True)

    ext = Path(f.filename).suffix or ".mp4"
    input_path = job_dir / f"input{ext}"
    f.save(input_path)

    _jobs[job_id] = {
        "dir": job_dir,
        "input_path": input_path,
        "filename": f.filename,
        "status": "uploaded",
    }

    return jsonify({"job_id": job_id, "filename": f.filename})


@bp.route("/api/jobs/<job_id>/export", methods=["POST"])
def start_export(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    if job["status"] not in ("uploaded", "done", "error"):
        return jsonify({"error": f"Job is already {job['status']}"}), 409

    config = request.get_json(silent=True) or {}
    try:
        segments = parse_segments(config.get("segments", []))
    except (KeyError, TypeError, ValueError):
        return jsonify({"error": "Segments must be a list of {start, end} numbers"}), 400

    output_dir = job["dir"] / "output"
    names = config.get("names") or []
    if config.get("merge", True):
        output_dir.mkdir(parents=True, exist_ok=True)
        base = Path(job["filename"]).stem + "_cut"
        target = MergeTarget(output_dir / _output_name(names[0] if names else "", base))
    else:
        target = SplitTarget(
            output_dir,
            tuple(_output_name(n, f"video_{i + 1}") for i, n in enumerate(names)),
        )

    export_request = ExportRequest(
        input=job["input_path"],
        target=target,
        segments=segments,
        encode=EncodeConfig(stream_copy=bool(config.get("stream_copy", False))),
    )
    ffmpeg_path = current_app.config.get("FFMPEG_PATH")
    resource_dir = current_app.config.get("RESOURCE_DIR")

    progress_queue: queue.Queue = queue.Queue()
    job["progress_queue"] = progress_queue
    job["status"] = "processing"
    job["error"] = None

    def run():
        try:
            def on_progress(stage: str, frac: float):
                progress_queue.put({"stage": stage, "progress": round(frac, 3)})

            result = export_video(
                export_request,
                ffmpeg=ffmpeg_path,
                resource_dir=resource_dir,
                on_progress=on_progress,
            )
            job["result"] = {
                "message": result.message,
                "outputs": [p.name for p in result.outputs],
                "output_dir": str(output_dir),
            }
            job["status"] = "done"
        except ExportError as e:
            job["status"] = "error"
            job["error"] = str(e)
        except Exception as e:
            logger.exception("Export job %s crashed", job_id)
            job["status"] = "error"
            job["error"] = str(e)
        finally:
            progress_queue.put(None)  # sentinel

    threading.Thread(target=run, daemon=True).start()
    return jsonify({"status": "started"})


@bp.route("/api/jobs/<job_id>/progress")
def progress_stream(job_id: str):
    """Stream export stages (one event per segment cut, then assembly) as SSE."""
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    q = job.get("progress_queue")

    if q is None:
        return jsonify({"error": "No export in progress"}), 409

    def generate():
        while True:
            try:
                msg = q.get(timeout=EXPORT_STAGE_TIMEOUT)
            except queue.Empty:
                yield "data: {\"error\": \"timeout\"}\n\n"
                break
            if msg is None:
                if job["status"] == "error":
                    data = json.dumps({"error": job["error"]})
                else:
                    data = json.dumps({
                        "stage": "complete",
                        "progress": 1.0,
                        "result": job.get("result"),
                    })
                yield f"data: {data}\n\n"
                break
            yield f"data: {json.dumps(msg)}\n\n"

    return Response(generate(), mimetype="text/event-stream")


@bp.route("/api/jobs/<job_id>/result")
def download_result(job_id: str):
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    if job["status"] != "done":
        return jsonify({"error": "Job not complete"}), 409

    outputs = job["result"]["outputs"]
    name = request.args.get("name") or outputs[0]
    if name not in outputs:
        return jsonify({"error": "Unknown output file"}), 404

    return send_file(Path(job["result"]["output_dir"]) / name, as_attachment=False)


@bp.route("/api/jobs/<job_id>/status")
def job_status(job_id: str):
    """Report the export state, with the written file names once done."""
    if job_id not in _jobs:
        return jsonify({"error": "Job not found"}), 404

    job = _jobs[job_id]
    resp = {"status": job["status"], "filename": job.get("filename")}
    if job["status"] == "done":
        resp["result"] = job.get("result")
    if job["status"] == "error":
        resp["error"] = job.get("error")
    return jsonify(resp)
