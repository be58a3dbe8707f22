"""HTML email templates for invites and opt-out confirmations."""

from html import escape
from typing import Optional, Sequence

from event_match.profile.models import SafeTeaserView

_STYLE = """
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background-color: #f5f5f5;
            margin: 0;
            padding: 20px;
            color: #333;
        }
        .container {
            max-width: 640px;
            margin: 0 auto;
            background: #fff;
            border-radius: 8px;
            overflow: hidden;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
        }
        .header {
            background: #1a73e8;
            color: white;
            padding: 24px;
            text-align: center;
        }
        .header h1 {
            margin: 0;
            font-size: 22px;
            font-weight: 600;
        }
        .content {
            padding: 24px;
        }
        .teaser-card {
            border: 1px solid #e0e0e0;
            border-radius: 8px;
            padding: 16px;
            margin-bottom: 16px;
        }
        .teaser-persona {
            font-size: 16px;
            font-weight: 600;
            color: #1a73e8;
        }
        .teaser-meta {
            font-size: 13px;
            color: #777;
            margin: 4px 0;
        }
        .score-badge {
            float: right;
            padding: 4px 10px;
            border-radius: 12px;
            font-size: 12px;
            font-weight: 600;
        }
        .score-high {
            background: #e8f5e9;
            color: #2e7d32;
        }
        .score-medium {
            background: #fff3e0;
            color: #ef6c00;
        }
        .score-low {
            background: #fce4ec;
            color: #c62828;
        }
        .cta {
            display: inline-block;
            background: #1a73e8;
            color: #fff;
            padding: 10px 18px;
            border-radius: 6px;
            text-decoration: none;
        }
        .footer {
            background: #fafafa;
            padding: 16px 24px;
            text-align: center;
            font-size: 12px;
            color: #999;
            border-top: 1px solid #eee;
        }
"""


def _wrap(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>{_STYLE}    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{escape(title)}</h1>
        </div>
        <div class="content">
            {body}
        </div>
        <div class="footer">
            Sent by Event Match
        </div>
    </div>
</body>
</html>"""


def render_invite_email(event_name: str, invite_url: str) -> tuple[str, str]:
    """Render the invite sent after an event.

    Returns (subject, html_body).
    """
    subject = f"Your top matches from {event_name}"
    body = f"""
            <p>Your personalized matches from <b>{escape(event_name)}</b> are ready.</p>
            <p>Preview anonymized matches, then reveal identities after you activate.</p>
            <p><a class="cta" href="{escape(invite_url)}">Preview anonymized matches</a></p>
            <p style="color:#999;font-size:12px;">This link expires soon.</p>"""
    return subject, _wrap(subject, body)


def render_teaser_email(
    event_name: str,
    teasers: Sequence[tuple[SafeTeaserView, int]],
    invite_url: str,
) -> tuple[str, str]:
    """Render an invite that previews anonymized matches with their scores."""
    subject = f"Your top matches from {event_name}"
    cards = "\n".join(_render_teaser_card(teaser, score) for teaser, score in teasers)
    body = f"""
            <p>Here is a preview of who you should meet from <b>{escape(event_name)}</b>.</p>
            {cards}
            <p><a class="cta" href="{escape(invite_url)}">Activate to reveal identities</a></p>"""
    return subject, _wrap(subject, body)


def _render_teaser_card(teaser: SafeTeaserView, score: int) -> str:
    """Render a single anonymized match card."""
    if score >= 70:
        score_class = "score-high"
    elif score >= 40:
        score_class = "score-medium"
    else:
        score_class = "score-low"

    meta = " &middot; ".join(escape(part) for part in (teaser.industry, teaser.experience_level))

    extra = ""
    if teaser.interests:
        extra += f'<div class="teaser-meta">Interests: {escape(", ".join(teaser.interests[:5]))}</div>'
    if teaser.seeking:
        extra += f'<div class="teaser-meta">Seeking: {escape(", ".join(teaser.seeking[:5]))}</div>'

    return f"""
            <div class="teaser-card">
                <span class="score-badge {score_class}">{score}% match</span>
                <div class="teaser-persona">{escape(teaser.persona)}</div>
                <div class="teaser-meta">{meta}</div>
                {extra}
            </div>"""


def render_opt_out_email(first_name: Optional[str] = None) -> tuple[str, str]:
    """Confirmation sent once an address has been added to the suppression list."""
    subject = "You've opted out of Event Match"
    greeting = f"Hi {escape(first_name)}," if first_name else "Hello,"
    body = f"""
            <p>{greeting}</p>
            <p>Your data has been removed and your email added to our suppression list.</p>"""
    return subject, _wrap(subject, body)
