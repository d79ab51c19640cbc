"""
Flask web application for reviewing and saving captured tasks.

This is a small JSON API that a browser extension popup or any review UI can
talk to. It provides:
- Scraping a page (posted HTML or a URL to fetch)
- The last scraped tasks, for review
- Saving reviewed tasks to the remote task API
- Reading and changing which API origin tasks are saved to
"""

import logging
from typing import Callable, Dict, List, Optional

from flask import Flask, jsonify, request

from .config import DEFAULT_TIMEZONE
from .document import PageDocument
from .errors import CaptureError, FetchError, SubmissionError
from .models import CapturedTask
from .scraper import TaskScraper
from .settings import SettingsStore
from .submission import TaskSubmitter, capture_tasks, normalize_due_date, normalize_labels, resolve_mode

logger = logging.getLogger(__name__)

SubmitterFactory = Callable[[str], TaskSubmitter]


def create_app(settings_store: Optional[SettingsStore] = None,
               submitter_factory: Optional[SubmitterFactory] = None,
               scraper: Optional[TaskScraper] = None,
               timezone_str: str = DEFAULT_TIMEZONE) -> Flask:
    """Create the review application.

    Args:
        settings_store: Where the API origin mode is kept (default location if None)
        submitter_factory: Builds a TaskSubmitter for an origin (TaskSubmitter if None)
        scraper: Task scraper (default configuration if None)
        timezone_str: Timezone for due dates edited during review

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)

    settings = settings_store or SettingsStore()
    make_submitter = submitter_factory or TaskSubmitter
    task_scraper = scraper or TaskScraper(timezone_str=timezone_str)

    # Tasks from the most recent scrape, waiting for review
    state: Dict[str, List[CapturedTask]] = {"last_tasks": []}

    def error_response(message: str, status: int):
        return jsonify({"ok": False, "error": message}), status

    @app.route('/api/scrape', methods=['POST'])
    def scrape_page():
        """Scrape posted HTML, or fetch and scrape a URL.

        Body: {"html": "...", "url": "..."}; html is optional when url is given.
        """
        payload = request.get_json(silent=True) or {}
        html = payload.get("html")
        url = payload.get("url") or ""

        if html is None and not url:
            return error_response("html or url is required", 400)

        try:
            if html is not None:
                document = PageDocument.from_html(html, url=url)
            else:
                document = PageDocument.from_url(url)
        except FetchError as e:
            return error_response(str(e), 502)

        tasks = task_scraper.scrape(document)
        state["last_tasks"] = capture_tasks(tasks, url=url)
        return jsonify({
            "ok": True,
            "count": len(tasks),
            "tasks": [t.to_dict() for t in state["last_tasks"]],
        })

    @app.route('/api/tasks', methods=['GET'])
    def last_tasks():
        """Tasks from the most recent scrape."""
        return jsonify({"ok": True, "tasks": [t.to_dict() for t in state["last_tasks"]]})

    @app.route('/api/tasks', methods=['POST'])
    def receive_tasks():
        """Replace the pending tasks with records scraped elsewhere (e.g. in a browser)."""
        payload = request.get_json(silent=True) or {}
        url = payload.get("url") or ""
        state["last_tasks"] = [CapturedTask.from_dict(t, url=url) for t in payload.get("tasks") or []]
        return jsonify({"ok": True, "tasks": [t.to_dict() for t in state["last_tasks"]]})

    @app.route('/api/tasks/save', methods=['POST'])
    def save_tasks():
        """Save reviewed tasks to the task API.

        Body: {"tasks": [{"title", "dueDate", "labels", "description"}, ...]}.
        Due dates may be edited free text; labels may be a comma-separated string.
        """
        payload = request.get_json(silent=True) or {}
        reviewed = []
        try:
            for item in payload.get("tasks") or []:
                task = CapturedTask.from_dict(item)
                task.due_date = normalize_due_date(item.get("dueDate"), timezone_str)
                if item.get("labels") is not None:
                    task.labels = normalize_labels(item.get("labels"))
                reviewed.append(task)
        except ValueError as e:
            return error_response(str(e), 400)

        submitter = make_submitter(settings.get_origin())
        try:
            results = submitter.save_tasks(reviewed)
        except SubmissionError as e:
            logger.warning("Saving tasks failed: %s", e)
            return error_response(str(e), 502)

        return jsonify({"ok": True, "results": results})

    @app.route('/api/env', methods=['GET'])
    def get_env():
        """Current API origin and its mode."""
        origin = settings.get_origin()
        return jsonify({"ok": True, "origin": origin, "mode": resolve_mode(origin)})

    @app.route('/api/env', methods=['POST'])
    def set_env():
        """Change the API origin. Body: {"mode": "prod" | "dev"} or {"origin": "https://..."}."""
        payload = request.get_json(silent=True) or {}
        mode_or_url = payload.get("mode") or payload.get("origin")
        if not mode_or_url:
            return error_response("mode or origin is required", 400)
        origin = settings.set_origin_mode(mode_or_url)
        return jsonify({"ok": True, "origin": origin, "mode": resolve_mode(origin)})

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return error_response("Not found", 404)

    @app.errorhandler(CaptureError)
    def capture_error(error):
        """Handle errors not caught by a route."""
        return error_response(str(error), 500)

    return app


if __name__ == '__main__':
    # Run development server
    create_app().run(debug=True, host='127.0.0.1', port=5000)
