from __future__ import annotations

from typing import Any

from fastapi import Body, Depends, FastAPI, Form, HTTPException
from fastapi.responses import HTMLResponse, RedirectResponse

from habits import (
    TIME_FRAMES,
    HabitNotFound,
    HabitStore,
    Settings,
    days_in_time_frame,
    habit_summary,
    load_settings,
    normalize_time_frame,
    parse_habit_form,
    setup_logging,
)

STYLE = """
body { font-family: -apple-system, system-ui, sans-serif; background: #0f1115; color: #e6e6e6; margin: 0; }
.container { max-width: 720px; margin: 0 auto; padding: 16px; }
.card { background: #171a21; border-radius: 12px; padding: 14px 16px; margin: 12px 0; }
.muted { color: #8b93a3; }
.small { font-size: 13px; }
.frames a { padding: 6px 14px; border-radius: 8px; color: #e6e6e6; text-decoration: none; }
.frames a.active { background: #2d6cdf; }
.bar { background: #2a2f3a; border-radius: 4px; height: 6px; margin: 4px 0 8px; }
.bar > div { height: 6px; border-radius: 4px; }
.streak > div { background: #2fbf71; }
.rate > div { background: #2d6cdf; }
.marks { letter-spacing: 4px; color: #2fbf71; }
.done-btn { background: #2fbf71; color: #fff; border: 0; border-radius: 10px; padding: 8px 14px; float: right; }
.done-btn[disabled] { background: #2a2f3a; }
.errors { color: #ff6b6b; }
input { display: block; width: 100%; margin: 6px 0; padding: 6px; box-sizing: border-box; }
"""


# ── HTML helpers ──────────────────────────────────────────────

def _escape(s: str) -> str:
    return (
        s.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _bar(kind: str, fraction: float) -> str:
    pct = max(0.0, min(1.0, fraction)) * 100
    return f'<div class="bar {kind}"><div style="width:{pct:.0f}%"></div></div>'


def _render_habit(s: dict[str, Any], frame: str) -> str:
    marks = "".join(
        f'<span title="{m["date"]}">{"&#9679;" if m["done"] else "&#9675;"}</span>'
        for m in s["checkmarks"]
    )
    rows = [
        f'<h3>{_escape(s["title"])}</h3>',
        f'<div class="muted small">Category: {_escape(s["category"])}</div>',
        f'<div class="muted small">Frequency: {_escape(s["frequency"])}</div>',
        f'<div>Current Streak: {s["streak"]} days</div>',
        _bar("streak", s["streakProgress"]),
    ]
    if "completionPercent" in s:
        rows.append(f'<div>Completion Rate: {s["completionPercent"]}%</div>')
        rows.append(_bar("rate", s["completionRate"]))
    rows.append(f'<div class="marks">{marks}</div>')
    if s["description"]:
        rows.append(f'<div class="muted small">Description: {_escape(s["description"])}</div>')
    if s["goal"] is not None:
        rows.append(f'<div class="muted small">Goal: {s["goal"]} days</div>')
    rows.append(
        f'<form method="post" action="/habits/{_escape(s["id"])}/done?frame={frame}">'
        f'<button class="done-btn" type="submit" {"disabled" if s["doneToday"] else ""}>'
        f'{"Done today" if s["doneToday"] else "Mark as Done"}</button></form>'
        '<div style="clear:both"></div>'
    )
    return '<section class="card">' + "".join(rows) + "</section>"


def _render_page(
    store: HabitStore,
    settings: Settings,
    frame: str,
    errors: list[str] | None = None,
    form: dict[str, Any] | None = None,
) -> str:
    days = days_in_time_frame(frame, store.today(), settings.week_start)
    cards = [_render_habit(habit_summary(store, h, days), frame) for h in store]
    tabs = "".join(
        f'<a class="{"active" if f == frame else ""}" href="/?frame={f}">{f.title()}</a>'
        for f in TIME_FRAMES
    )
    form = form or {}

    def _value(name: str) -> str:
        return _escape(str(form.get(name) or ""))

    error_html = ""
    if errors:
        error_html = '<div class="errors small">' + "<br>".join(_escape(e) for e in errors) + "</div>"

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Habit Tracker</title>
  <style>{STYLE}</style>
</head>
<body>
  <div class="container">
    <h1>Habit Tracker</h1>
    <nav class="frames">{tabs}</nav>

    {''.join(cards) if cards else '<div class="card muted">No habits yet.</div>'}

    <section class="card">
      <details {'open' if errors else ''}>
        <summary><b>Add New Habit</b></summary>
        {error_html}
        <form method="post" action="/habits?frame={frame}">
          <input name="title" placeholder="Habit Title" value="{_value('title')}" />
          <input name="category" placeholder="Category" value="{_value('category')}" />
          <input name="frequency" placeholder="Frequency" value="{_value('frequency')}" />
          <input name="goal" placeholder="Goal (optional)" inputmode="numeric" value="{_value('goal')}" />
          <input name="description" placeholder="Description (optional)" value="{_value('description')}" />
          <button type="submit">Save</button>
        </form>
      </details>
    </section>
    <footer class="muted small">{len(cards)} habits · week starts {settings.week_start} · {settings.timezone}</footer>
  </div>
</body>
</html>"""


# ── App state ─────────────────────────────────────────────────

app = FastAPI(title="Habit Tracker", version="0.1.0")

_settings: Settings | None = None
_store: HabitStore | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def get_store(settings: Settings = Depends(get_settings)) -> HabitStore:
    """Process-wide store, seeded on first use."""
    global _store
    if _store is None:
        _store = HabitStore.from_settings(settings)
    return _store


def _frame_or_400(frame: str) -> str:
    try:
        return normalize_time_frame(frame)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _get_or_404(store: HabitStore, habit_id: str):
    try:
        return store.get(habit_id)
    except HabitNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


# ── Screen ────────────────────────────────────────────────────

@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.get("/", response_class=HTMLResponse)
def index(
    frame: str = "daily",
    store: HabitStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    return HTMLResponse(_render_page(store, settings, _frame_or_400(frame)))


@app.post("/habits")
def add_habit_form(
    frame: str = "daily",
    title: str = Form(""),
    category: str = Form(""),
    frequency: str = Form(""),
    goal: str = Form(""),
    description: str = Form(""),
    store: HabitStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    frame = _frame_or_400(frame)
    raw = {
        "title": title,
        "category": category,
        "frequency": frequency,
        "goal": goal,
        "description": description,
    }
    fields, errors = parse_habit_form(raw)
    if errors:
        return HTMLResponse(_render_page(store, settings, frame, errors, raw), status_code=400)
    store.add(**fields)
    return RedirectResponse(url=f"/?frame={frame}", status_code=303)


@app.post("/habits/{habit_id}/done")
def mark_done_form(
    habit_id: str,
    frame: str = "daily",
    store: HabitStore = Depends(get_store),
) -> RedirectResponse:
    frame = _frame_or_400(frame)
    store.mark_done(habit_id)
    return RedirectResponse(url=f"/?frame={frame}", status_code=303)


# ── JSON API ──────────────────────────────────────────────────

@app.get("/api/habits")
def api_list_habits(
    frame: str = "daily",
    store: HabitStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """Habits with display values for the requested time frame."""
    frame = _frame_or_400(frame)
    days = days_in_time_frame(frame, store.today(), settings.week_start)
    return {
        "frame": frame,
        "today": store.today().isoformat(),
        "days": [d.isoformat() for d in days],
        "habits": [habit_summary(store, h, days) for h in store],
    }


@app.post("/api/habits")
def api_create_habit(
    payload: dict[str, Any] = Body(...),
    store: HabitStore = Depends(get_store),
) -> dict[str, Any]:
    fields, errors = parse_habit_form(payload)
    if errors:
        raise HTTPException(status_code=400, detail="; ".join(errors))
    habit = store.add(**fields)
    return {"ok": True, "habit": habit.to_dict()}


@app.get("/api/habits/{habit_id}")
def api_get_habit(
    habit_id: str,
    frame: str = "daily",
    store: HabitStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    frame = _frame_or_400(frame)
    habit = _get_or_404(store, habit_id)
    days = days_in_time_frame(frame, store.today(), settings.week_start)
    return habit_summary(store, habit, days)


@app.post("/api/habits/{habit_id}/done")
def api_mark_done(habit_id: str, store: HabitStore = Depends(get_store)) -> dict[str, Any]:
    """Mark done for today; 'recorded' is false when already done today."""
    _get_or_404(store, habit_id)
    recorded = store.mark_done(habit_id)
    return {"ok": True, "recorded": recorded, "habit": store.get(habit_id).to_dict()}


# ── Entry point ───────────────────────────────────────────────

def main() -> None:
    import uvicorn

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    uvicorn.run(app, host=settings.web_host, port=settings.web_port)


if __name__ == "__main__":
    main()
