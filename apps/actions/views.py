"""
Views for the actions app.

Provides API endpoints for firing action connectors and listing action types.
"""

import json
import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.actions.action_types import ACTION_TYPE_REGISTRY, get_action_type
from apps.actions.services import ActionService

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class ActionExecuteView(View):
    """
    API endpoint for firing an action connector.

    POST /actions/execute/<connector>/

    Accepts JSON payload:
    {
        "action_id": "alert-123",  // optional, defaults to the connector name
        "params": {
            "dedupKey": "...",
            "alertName": "High CPU on web-1",
            "jobParams": {"options": {"host": "web-1"}}
        }
    }
    """

    def post(self, request, connector):
        """Handle action execute request."""
        try:
            try:
                payload = json.loads(request.body or b"{}")
            except json.JSONDecodeError as e:
                logger.warning(f"Invalid JSON payload: {e}")
                return JsonResponse(
                    {"status": "error", "message": "Invalid JSON payload"},
                    status=400,
                )

            if not isinstance(payload, dict):
                return JsonResponse(
                    {"status": "error", "message": "Payload must be a JSON object"},
                    status=400,
                )

            params = payload.get("params") or {}
            action_id = payload.get("action_id") or connector

            celery_eager = bool(getattr(settings, "CELERY_TASK_ALWAYS_EAGER", False))
            if getattr(settings, "ACTIONS_ASYNC_EXECUTION", False) and not celery_eager:
                try:
                    from apps.actions.tasks import execute_connector_action

                    async_res = execute_connector_action.delay(connector, params, action_id)
                    return JsonResponse(
                        {"status": "queued", "task_id": async_res.id},
                        status=202,
                    )
                except Exception as enqueue_err:
                    # Broker unreachable: run inline rather than dropping the action.
                    logger.warning(
                        "Celery enqueue failed; falling back to sync execution: %s",
                        enqueue_err,
                    )

            result = ActionService().execute_connector(connector, params, action_id)
            if result.is_ok:
                logger.info(f"Action {action_id} executed via connector {connector}")
                return JsonResponse(result.to_dict())

            logger.warning(f"Action {action_id} failed via connector {connector}: {result.message}")
            return JsonResponse(result.to_dict(), status=502)

        except Exception as e:
            logger.exception("Unexpected error executing action")
            return JsonResponse(
                {"status": "error", "message": str(e)},
                status=500,
            )

    def get(self, request, connector):
        """Health check endpoint."""
        return JsonResponse(
            {
                "status": "ok",
                "message": f"Action endpoint ready for connector {connector}",
            }
        )


class ActionTypesView(View):
    """
    List registered action types.

    GET /actions/types/
    GET /actions/types/<type_id>/
    """

    def get(self, request, type_id=None):
        if type_id:
            if type_id not in ACTION_TYPE_REGISTRY:
                return JsonResponse(
                    {
                        "status": "error",
                        "message": f"Unknown action type: {type_id}",
                        "available_action_types": list(ACTION_TYPE_REGISTRY.keys()),
                    },
                    status=404,
                )
            return JsonResponse(
                {"status": "ok", "action_type": get_action_type(type_id).describe()}
            )

        return JsonResponse(
            {
                "status": "ok",
                "action_types": [
                    get_action_type(type_id).describe() for type_id in ACTION_TYPE_REGISTRY
                ],
            }
        )
