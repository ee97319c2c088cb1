# services/drill_service.py
import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Optional, Tuple, Union

from models.account import Account, DrillRecord
from services.errors import Conflict, NotFound, StaleAccount, ValidationFailed
from services.user_store import UserStore

logger = logging.getLogger(__name__)

MAX_SAVE_ATTEMPTS = 5
# Keeps means exact under decimal arithmetic and results within BSON int64
MAX_ABS_SCORE = 10 ** 15

Number = Union[int, float]


def round_half_away_from_zero(value: Number) -> int:
    """Round to the nearest integer, sending .5 away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def validate_drill_submission(drill_name: Any, score: Any) -> Tuple[str, Number]:
    if not isinstance(drill_name, str) or not drill_name:
        raise ValidationFailed("drillName and score are required")
    # bool is an int subclass, but True is not a score
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise ValidationFailed("drillName and score are required")
    if not math.isfinite(score):
        raise ValidationFailed("drillName and score are required")
    if abs(score) > MAX_ABS_SCORE:
        raise ValidationFailed("score is out of range")
    return drill_name, score


def recompute_standing(account: Account) -> Account:
    account.drills_completed = len(account.drills)
    if not account.drills:
        account.preparedness_score = 0
        return account
    total = sum(Decimal(str(d.score)) for d in account.drills)
    account.preparedness_score = round_half_away_from_zero(total / len(account.drills))
    return account


def record_drill(account: Account, drill_name: str, score: Number) -> Account:
    """
    Merge one drill result into the account's history.

    A drill already on record keeps its position and takes the new score;
    an unseen drill is appended. Derived fields are recomputed afterwards.
    """
    for drill in account.drills:
        if drill.drill_name == drill_name:
            drill.score = score
            break
    else:
        account.drills.append(DrillRecord(drill_name=drill_name, score=score))

    return recompute_standing(account)


def _mutate_with_retry(
    store: UserStore,
    account_id: str,
    mutate: Callable[[Account], Account],
    not_found_message: str,
) -> Account:
    for attempt in range(1, MAX_SAVE_ATTEMPTS + 1):
        account = store.find_by_id(account_id)
        if account is None:
            raise NotFound(not_found_message)
        try:
            return store.save(mutate(account))
        except StaleAccount:
            logger.warning("Concurrent update on account %s (attempt %d)", account_id, attempt)

    raise Conflict("Account is being updated elsewhere, please retry")


def submit_drill(store: UserStore, account_id: str, drill_name: Any, score: Any) -> Account:
    drill_name, score = validate_drill_submission(drill_name, score)

    account = _mutate_with_retry(
        store,
        account_id,
        lambda acc: record_drill(acc, drill_name, score),
        "Student not found",
    )
    logger.info(
        "Recorded drill %r for account %s: %d drills, score %s",
        drill_name, account_id, account.drills_completed, account.preparedness_score,
    )
    return account


def override_progress(
    store: UserStore,
    account_id: str,
    preparedness_score: Optional[Number] = None,
    drills_completed: Optional[int] = None,
) -> Account:
    """
    Overwrite the derived progress fields directly, leaving ``drills`` alone.

    Afterwards the fields may no longer match the drill history; the next
    drill submission recomputes them from ``drills``.
    """
    if preparedness_score is not None and (
        not math.isfinite(preparedness_score) or abs(preparedness_score) > MAX_ABS_SCORE
    ):
        raise ValidationFailed("preparednessScore is out of range")
    if drills_completed is not None and abs(drills_completed) > MAX_ABS_SCORE:
        raise ValidationFailed("drillsCompleted is out of range")

    if preparedness_score is None and drills_completed is None:
        account = store.find_by_id(account_id)
        if account is None:
            raise NotFound("User not found")
        return account

    def _apply(account: Account) -> Account:
        if preparedness_score is not None:
            account.preparedness_score = preparedness_score
        if drills_completed is not None:
            account.drills_completed = drills_completed
        return account

    account = _mutate_with_retry(store, account_id, _apply, "User not found")
    logger.warning(
        "Progress override on account %s: preparednessScore=%s drillsCompleted=%s",
        account_id, preparedness_score, drills_completed,
    )
    return account
