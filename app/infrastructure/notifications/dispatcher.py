"""Push notification fan-out dispatcher.

Delivers one notification to every resolved token concurrently:
- Obtains a single access token for the whole fan-out
- Sends to each token on its own worker thread
- Isolates failures so a bad token only fails itself
- Waits for every send to settle before reporting counts

Usage Example:
    from infrastructure.notifications import FcmChannel, dispatch

    channel = FcmChannel(project_id="my-project")
    summary = dispatch(intent, tokens, credential_provider, channel.send)
    logger.info("push_fanout_done", sent=summary.sent_count)
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Collection, Protocol, Union

from core.logging import get_module_logger
from infrastructure.notifications.exceptions import DeliveryFailure
from infrastructure.notifications.models import DeliveryOutcome, DeliverySummary
from infrastructure.operations import OperationResult

logger = get_module_logger()

SendFunction = Callable[..., Union[OperationResult, bool]]


class CredentialProvider(Protocol):
    def get_access_token(self) -> str: ...


def _outcome_from_result(token: str, result: Any) -> DeliveryOutcome:
    """Turn whatever a send function returned into a DeliveryOutcome.

    An OperationResult carries its own status. A bare boolean is taken as
    delivered or not. Anything else counts as a failed delivery.
    """
    if isinstance(result, OperationResult):
        if result.is_success:
            return DeliveryOutcome(token=token, delivered=True)
        return DeliveryOutcome(
            token=token,
            delivered=False,
            error_code=result.error_code,
            detail=result.data if result.data is not None else result.message,
        )
    if result is True:
        return DeliveryOutcome(token=token, delivered=True)
    return DeliveryOutcome(
        token=token,
        delivered=False,
        error_code="SEND_FAILED",
        detail=f"Send returned {result!r}",
    )


def _send_one(
    send_fn: SendFunction,
    token: str,
    title: str,
    body: str,
    match_id: Any,
    access_token: str,
) -> DeliveryOutcome:
    try:
        result = send_fn(
            token=token,
            title=title,
            body=body,
            match_id=match_id,
            access_token=access_token,
        )
        return _outcome_from_result(token, result)
    except DeliveryFailure as e:
        return DeliveryOutcome(
            token=token,
            delivered=False,
            error_code=e.error_code,
            detail=e.detail or str(e),
        )
    except Exception as e:  # pylint: disable=broad-except
        return DeliveryOutcome(
            token=token, delivered=False, error_code=type(e).__name__, detail=str(e)
        )


def dispatch(
    intent,
    tokens: Collection[str],
    credential_provider: CredentialProvider,
    send_fn: SendFunction,
) -> DeliverySummary:
    """Send the intent's title and body to every token.

    Process:
    1. Return an empty summary for an empty token set, without asking for
       a credential
    2. Obtain one access token for the whole fan-out
    3. Start one send per token, each on its own worker
    4. Wait for all sends to settle and count the successes

    Args:
        intent: NotificationIntent whose title, body and match_id are sent
        tokens: Distinct delivery tokens
        credential_provider: Produces the bearer token for the platform
        send_fn: Sends to a single token and returns an OperationResult or
            a boolean; any other return value counts as a failed send

    Returns:
        DeliverySummary with sent and total counts.

    Raises:
        CredentialError: if the access token cannot be obtained. No sends are
            attempted in that case.
    """
    if not tokens:
        return DeliverySummary(sent_count=0, total_count=0)

    access_token = credential_provider.get_access_token()

    outcomes = []
    with ThreadPoolExecutor(max_workers=len(tokens)) as executor:
        futures = [
            executor.submit(
                _send_one,
                send_fn,
                token,
                intent.title,
                intent.body,
                intent.match_id,
                access_token,
            )
            for token in tokens
        ]
        for future in as_completed(futures):
            outcome = future.result()
            if not outcome.delivered:
                logger.warning(
                    "push_delivery_failed",
                    token_prefix=outcome.token_prefix,
                    error_code=outcome.error_code,
                    response=outcome.detail,
                )
            outcomes.append(outcome)

    sent_count = sum(1 for outcome in outcomes if outcome.delivered)
    logger.info(
        "push_fanout_completed",
        match_id=intent.match_id,
        sent_count=sent_count,
        total_count=len(outcomes),
    )
    return DeliverySummary(
        sent_count=sent_count, total_count=len(outcomes), outcomes=outcomes
    )
