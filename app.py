import logging
import threading

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

import config
from queue_console import HELP_TEXT, QueueConsole

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = config.SECRET_KEY

console = QueueConsole()
# QueueConsole は同期しないので、リクエスト間はこのロックで直列化する
console_lock = threading.Lock()


# -------------------------
# 画面
# -------------------------
@app.route("/", methods=["GET"])
def index():
    with console_lock:
        state = console.snapshot()
        history = list(console.history)
    return render_template(
        "index.html",
        state=state,
        history=history,
        help_text=HELP_TEXT,
    )


@app.route("/command", methods=["POST"])
def run_command():
    line = (request.form.get("line") or "").strip()
    if not line:
        flash("コマンドを入力してください", "error")
        return redirect(url_for("index"))

    with console_lock:
        ok, msg = console.execute(line)
    flash(f"cmd> {line}: {msg}", "success" if ok else "error")
    return redirect(url_for("index"))


@app.route("/reset", methods=["POST"])
def reset():
    with console_lock:
        console.reset()
    logger.info("console reset")
    flash("リセットしました", "success")
    return redirect(url_for("index"))


# -------------------------
# API
# -------------------------
@app.route("/api/queue", methods=["GET"])
def api_queue():
    with console_lock:
        state = console.snapshot()
    return jsonify(state)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    app.run(debug=True)
