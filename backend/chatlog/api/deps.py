from fastapi import Query

OK = {"status": "ok"}
ERROR = {"status": "error"}


def range_params(
    from_: str | None = Query(default=None, alias="from"),
    to: str | None = Query(default=None),
):
    return {"from_raw": from_, "to_raw": to}
