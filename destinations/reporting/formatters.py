"""Output formatters for search summaries."""

import json

from destinations.models.reporting import SearchSummary


def format_summary_text(s: SearchSummary) -> str:
    """Plain text summary for logging."""
    lines = [
        f"=== Search Complete | Request {s.request_id[:8]} ===",
        f"Discovered: {s.candidates_found} places within {s.radius_km:.1f}km, "
        f"{s.forecasts_received} with forecasts",
        f"Scored: {s.candidates_scored}, excluded: {s.excluded_count}",
    ]
    if s.exclusions:
        reasons = ", ".join(f"{v} {k}" for k, v in sorted(s.exclusions.items()))
        lines.append(f"Exclusions: {reasons}")
    lines.append(f"Returned: {s.results_returned}")
    if s.results_returned:
        lines.append(f"Best: {s.best_score:.1f} ({s.best_label})")
    if s.errors:
        lines.append(f"Errors: {len(s.errors)}")
    lines.append(f"Duration: {s.duration_seconds:.2f}s")
    return "\n".join(lines)


def format_summary_json(s: SearchSummary) -> str:
    """JSON summary for programmatic consumption."""
    data = {
        "request_id": s.request_id,
        "radius_km": s.radius_km,
        "candidates_found": s.candidates_found,
        "forecasts_received": s.forecasts_received,
        "candidates_scored": s.candidates_scored,
        "exclusions": s.exclusions,
        "results_returned": s.results_returned,
        "best_score": s.best_score,
        "best_label": s.best_label,
        "duration_seconds": s.duration_seconds,
        "errors": s.errors,
    }
    return json.dumps(data, indent=2)
