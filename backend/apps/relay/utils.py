from rest_framework.response import Response


def error_response(message, status_code, extra_data=None):
    response_data = {"error": message}
    if extra_data:
        response_data.update(extra_data)
    return Response(response_data, status=status_code)


def parse_request_body(request):
    try:
        return request.data
    except Exception:
        return error_response("Invalid request body", 400)
