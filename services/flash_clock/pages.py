"""HTML for the landing and configure pages."""

from __future__ import annotations

import html

from services.flash_clock.manifest import ADDON_LOGO
from services.flash_clock.validator import STANDARD_FLASH_DURATIONS, STANDARD_REPEAT_INTERVALS
from shared.models import ClockConfig

_STYLE = """
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: linear-gradient(135deg, #524948 0%, #3a3433 100%);
            min-height: 100vh;
            color: #fff;
            display: flex;
            align-items: center;
            justify-content: center;
            padding: 24px;
        }
        .card {
            background: rgba(255, 255, 255, 0.06);
            border: 1px solid rgba(255, 255, 255, 0.12);
            border-radius: 16px;
            padding: 32px;
            max-width: 480px;
            width: 100%;
        }
        h1 { margin-bottom: 8px; }
        .subtitle, .tagline { color: #7CB4B8; margin-bottom: 24px; }
        .option-group { margin-bottom: 16px; }
        label { display: block; margin-bottom: 6px; font-weight: 600; }
        select { width: 100%; padding: 10px; border-radius: 8px; border: none; }
        .install-btn {
            display: block;
            text-align: center;
            margin-top: 24px;
            padding: 14px;
            border-radius: 10px;
            background: #70F8BA;
            color: #3a3433;
            font-weight: 700;
            text-decoration: none;
        }
        .note, footer { margin-top: 16px; font-size: 13px; color: rgba(255, 255, 255, 0.6); }
        .feature { margin-bottom: 12px; }
        #clock { font-size: 48px; font-weight: 700; color: #CAFE48; margin: 16px 0; }
"""

FLASH_DURATION_LABELS = {value: f"{value} seconds" for value in STANDARD_FLASH_DURATIONS}
REPEAT_INTERVAL_LABELS = {
    10: "Every 10 seconds",
    20: "Every 20 seconds",
    30: "Every 30 seconds",
    60: "Every 60 seconds",
    120: "Every 2 minutes",
    300: "Every 5 minutes",
}
TIME_FORMAT_LABELS = {"24h": "24-hour (14:30)", "12h": "12-hour (2:30 PM)"}
MODE_LABELS = {
    "flash": "Flash (shows briefly, then hides)",
    "always-on": "Always On (continuous)",
    "subliminal": "Subliminal (50ms flash)",
}


def _options(labels: dict, selected: object) -> str:
    rendered = []
    for value, label in labels.items():
        marker = " selected" if str(value) == str(selected) else ""
        rendered.append(
            f'<option value="{html.escape(str(value))}"{marker}>{html.escape(label)}</option>'
        )
    # Keep a non-standard current value selectable
    if str(selected) not in {str(value) for value in labels}:
        rendered.append(
            f'<option value="{html.escape(str(selected))}" selected>{html.escape(str(selected))}</option>'
        )
    return "\n                ".join(rendered)


def render_landing_page() -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Flash Clock - Stremio Addon</title>
    <link rel="icon" type="image/x-icon" href="{ADDON_LOGO}">
    <style>{_STYLE}</style>
</head>
<body>
    <div class="card">
        <h1>Flash Clock</h1>
        <p class="tagline">Know the time without leaving your movie</p>
        <div id="clock"></div>
        <div class="feature"><strong>Flash mode</strong>
            <p>Clock appears briefly then disappears. Perfect for a quick glance without distraction.</p></div>
        <div class="feature"><strong>Always on</strong>
            <p>Keep the clock visible continuously in the corner. Great for time-sensitive viewing.</p></div>
        <div class="feature"><strong>Customizable</strong>
            <p>Choose 12h or 24h format, flash duration, repeat interval, and display mode.</p></div>
        <a class="install-btn" href="/configure">Configure &amp; Install</a>
        <footer>
            <p>Open source on <a href="https://github.com/Kepners/clockrr" target="_blank">GitHub</a></p>
            <p class="made-with">Made for Stremio</p>
        </footer>
    </div>
    <script>
        function updateClock() {{
            const now = new Date();
            document.getElementById('clock').textContent =
                now.getHours().toString().padStart(2, '0') + ':' +
                now.getMinutes().toString().padStart(2, '0');
        }}
        updateClock();
        setInterval(updateClock, 1000);
    </script>
</body>
</html>"""


def render_configure_page(clock_config: ClockConfig) -> str:
    """Configure page with selections taken from a resolved configuration."""
    flash_display = "block" if clock_config.mode.value == "flash" else "none"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Flash Clock - Configure</title>
    <link rel="icon" type="image/x-icon" href="{ADDON_LOGO}">
    <style>{_STYLE}</style>
</head>
<body>
    <div class="card">
        <h1>🕒 Flash Clock</h1>
        <p class="subtitle">Configure your clock overlay settings</p>

        <div class="option-group">
            <label>Time Format</label>
            <select id="timeFormat" onchange="updateLink()">
                {_options(TIME_FORMAT_LABELS, clock_config.time_format.value)}
            </select>
        </div>

        <div class="option-group">
            <label>Display Mode</label>
            <select id="mode" onchange="updateLink()">
                {_options(MODE_LABELS, clock_config.mode.value)}
            </select>
        </div>

        <div class="option-group" id="flashOptions" style="display: {flash_display}">
            <label>Flash Duration</label>
            <select id="flashDurationSec" onchange="updateLink()">
                {_options(FLASH_DURATION_LABELS, clock_config.flash_duration_seconds)}
            </select>
        </div>

        <div class="option-group" id="intervalOptions" style="display: {flash_display}">
            <label>Repeat Interval</label>
            <select id="repeatIntervalSec" onchange="updateLink()">
                {_options(REPEAT_INTERVAL_LABELS, clock_config.repeat_interval_seconds)}
            </select>
        </div>

        <a id="installLink" class="install-btn" href="#">Install Addon</a>

        <p class="note">Clicking Install will update your existing addon configuration</p>
    </div>

    <script>
        function updateLink() {{
            const mode = document.getElementById('mode').value;
            const display = mode === 'flash' ? 'block' : 'none';
            document.getElementById('flashOptions').style.display = display;
            document.getElementById('intervalOptions').style.display = display;

            const config = {{
                timeFormat: document.getElementById('timeFormat').value,
                mode: mode,
                flashDurationSec: document.getElementById('flashDurationSec').value,
                repeatIntervalSec: document.getElementById('repeatIntervalSec').value
            }};

            const configStr = btoa(JSON.stringify(config));
            document.getElementById('installLink').href =
                'stremio://' + window.location.host + '/' + encodeURIComponent(configStr) + '/manifest.json';
        }}

        updateLink();
    </script>
</body>
</html>"""
