from data.models import AnswerRecord, SessionResult


BLANK_ANSWER = "(blank)"


def verdict(record: AnswerRecord) -> str:
    return "Correct" if record.correct else "Wrong"


def format_score(result: SessionResult) -> str:
    return f"{result.score} / {result.total}"


def format_record(position: int, record: AnswerRecord) -> list[str]:
    user = record.user_input or BLANK_ANSWER
    if record.timed_out:
        user = f"{user}, time is up"
    return [
        f"#{position}  {verdict(record)}  {'+1' if record.correct else '+0'}",
        f"Question: {record.prompt}",
        f"Your answer: {user}",
        f"Correct answer: {record.correct_answer}",
    ]


def review_lines(result: SessionResult) -> list[list[str]]:
    return [format_record(i, r) for i, r in enumerate(result.results, start=1)]


def page_count(total: int, per_page: int) -> int:
    per_page = max(1, per_page)
    return max(1, (total + per_page - 1) // per_page)


def clamp_page(page: int, total: int, per_page: int) -> int:
    return max(0, min(page, page_count(total, per_page) - 1))


def page_bounds(page: int, total: int, per_page: int) -> range:
    page = clamp_page(page, total, per_page)
    start = page * max(1, per_page)
    return range(start, min(total, start + max(1, per_page)))


def summarize(result: SessionResult) -> dict:
    timeouts = sum(1 for r in result.results if r.timed_out)
    return {
        "score": result.score,
        "total": result.total,
        "accuracy": round(result.accuracy, 3),
        "timeouts": timeouts,
        "blank": sum(1 for r in result.results if not r.user_input),
    }
