"""
API grammar rules
Authentication and request context, HTTP and SOAP requests, response
extraction and printing, response assertions and request chaining.

Sub-bands:
    850-869  context, headers and authentication
    870-889  requests, uploads, downloads and polling
    890-909  response extraction, saving and printing
    910-934  response assertions
    935-944  chaining and retries
    945-949  SOAP
"""
from stepgrammar.grammars.extractors import Q, FormatRef, GroupRef, JsonRef, LiteralRef, mapped
from stepgrammar.grammars.registry import GrammarTable
from stepgrammar.grammars.types import GrammarRule, StepCategory, StepIntent, StepModifiers

_SET = r'^set\s+api\s+'
_AUTH = r'^set\s+api\s+(?:auth|authentication)\s+'
_REQUEST = r'^(?:send|make|execute)\s+(?:a\s+)?(?:api\s+)?'
_TO = r'\s+(?:request\s+)?(?:to\s+)?'
_GET_RESPONSE = r'^get\s+(?:the\s+)?(?:api\s+)?response\s+'
_PRINT = r'^print\s+(?:the\s+)?(?:api\s+)?'
_VERIFY_RESPONSE = r'^verify\s+(?:that\s+)?(?:the\s+)?(?:api\s+)?response\s+'
_JSONPATH = rf'{_VERIFY_RESPONSE}(?:jsonpath\s+)?{Q}\s+'
_MS = r'\s*(?:ms|milliseconds?)?'
_POLL_TIMING = rf'(?:\s+every\s+(\d+){_MS})?(?:\s+(?:max|timeout)\s+(\d+){_MS})?'

_NEGATED = StepModifiers(negated=True)


def _auth(auth_type: str, **fields) -> dict:
    return {'apiAuthType': auth_type, 'apiAuthParams': JsonRef(fields)}


def _request(method: str, **params) -> dict:
    return dict({'httpMethod': method, 'apiUrl': LiteralRef(1)}, **params)


API_RULES = [
    # Context, headers and authentication
    GrammarRule(
        id='api-set-base-url',
        pattern=rf'{_SET}base\s+url\s+(?:to\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_CONTEXT,
        priority=850,
        extract=mapped(params={'url': LiteralRef(1)}),
        examples=["Set API base URL to 'https://api.example.com'",
                  "Set API base URL 'https://staging.api.example.com/v2'"],
    ),
    GrammarRule(
        id='api-set-header',
        pattern=rf'{_SET}header\s+{Q}\s+(?:to|=)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_HEADER,
        priority=851,
        extract=mapped(params={'attribute': LiteralRef(1)}, value=LiteralRef(2)),
        examples=["Set API header 'Content-Type' to 'application/json'",
                  "Set API header 'Accept' = 'text/xml'"],
    ),
    GrammarRule(
        id='api-set-headers-from-context',
        pattern=rf'{_SET}headers\s+from\s+context\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_HEADER,
        priority=852,
        extract=mapped(params={'apiContext': LiteralRef(1)}),
        examples=["Set API headers from context 'defaultHeaders'"],
    ),
    GrammarRule(
        id='api-auth-basic',
        pattern=rf'{_AUTH}basic\s+{Q}\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=853,
        extract=mapped(params=_auth('basic', username=LiteralRef(1), password=LiteralRef(2))),
        examples=["Set API auth basic 'admin' 'secret123'",
                  "Set API authentication basic 'testuser' 'testpass'"],
    ),
    GrammarRule(
        id='api-auth-bearer',
        pattern=rf'{_AUTH}bearer\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=854,
        extract=mapped(params=_auth('bearer', token=LiteralRef(1))),
        examples=["Set API auth bearer 'eyJhbGciOiJIUzI1NiIsInR5'",
                  "Set API authentication bearer 'my-jwt-token'"],
    ),
    GrammarRule(
        id='api-auth-bearer-from-context',
        pattern=rf'{_AUTH}bearer\s+from\s+context\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=855,
        extract=mapped(params={'apiAuthType': 'bearer', 'apiContext': LiteralRef(1)}),
        examples=["Set API auth bearer from context 'authToken'",
                  "Set API authentication bearer from context 'loginResponse.token'"],
    ),
    GrammarRule(
        id='api-auth-apikey',
        pattern=rf'{_AUTH}api[-\s]?key\s+{Q}\s+(?:in\s+)?(header|query)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=856,
        extract=mapped(params=_auth('apikey', key=LiteralRef(1),
                                    location=GroupRef(2, convert=str.lower),
                                    paramName=LiteralRef(3))),
        examples=["Set API auth apikey 'abc123def456' in header 'X-API-Key'",
                  "Set API authentication api-key 'mykey' in query 'api_key'"],
    ),
    GrammarRule(
        id='api-auth-oauth2-client',
        pattern=rf'{_AUTH}oauth2\s+client\s+credentials\s+{Q}\s+{Q}\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=857,
        extract=mapped(params=_auth('oauth2-client', clientId=LiteralRef(1),
                                    clientSecret=LiteralRef(2), tokenUrl=LiteralRef(3))),
        examples=["Set API auth oauth2 client credentials 'my-client-id' 'my-client-secret' "
                  "'https://auth.example.com/token'"],
    ),
    GrammarRule(
        id='api-auth-oauth2-password',
        pattern=rf'{_AUTH}oauth2\s+password\s+{Q}\s+{Q}\s+{Q}\s+{Q}\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=858,
        extract=mapped(params=_auth('oauth2-password', username=LiteralRef(1),
                                    password=LiteralRef(2), clientId=LiteralRef(3),
                                    clientSecret=LiteralRef(4), tokenUrl=LiteralRef(5))),
        examples=["Set API auth oauth2 password 'admin' 'pass123' 'client-id' 'client-secret' "
                  "'https://auth.example.com/token'"],
    ),
    GrammarRule(
        id='api-auth-certificate',
        pattern=rf'{_AUTH}certificate\s+{Q}\s+key\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=859,
        extract=mapped(params=_auth('certificate', certPath=LiteralRef(1), keyPath=LiteralRef(2))),
        examples=["Set API auth certificate 'certs/client.pem' key 'certs/client-key.pem'"],
    ),
    GrammarRule(
        id='api-auth-pfx',
        pattern=rf'{_AUTH}pfx\s+{Q}\s+passphrase\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=860,
        extract=mapped(params=_auth('pfx', pfxPath=LiteralRef(1), passphrase=LiteralRef(2))),
        examples=["Set API auth pfx 'certs/client.pfx' passphrase 'mypassphrase'"],
    ),
    GrammarRule(
        id='api-auth-ntlm',
        pattern=rf'{_AUTH}ntlm\s+{Q}\s+{Q}(?:\s+domain\s+{Q})?$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_AUTH,
        priority=861,
        extract=mapped(params=_auth('ntlm', username=LiteralRef(1), password=LiteralRef(2),
                                    domain=LiteralRef(3, optional=True))),
        examples=["Set API auth ntlm 'user' 'password' domain 'CORP'",
                  "Set API authentication ntlm 'admin' 'secret123'"],
    ),
    GrammarRule(
        id='api-set-context',
        pattern=rf'{_SET}context\s+{Q}\s+(?:to|=)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_CONTEXT,
        priority=862,
        extract=mapped(params={'apiContext': LiteralRef(1)}, value=LiteralRef(2)),
        examples=["Set API context 'environment' to 'staging'",
                  """Set API context 'baseConfig' = '{"timeout":30000}'"""],
    ),
    GrammarRule(
        id='api-clear-context',
        pattern=rf'^clear\s+api\s+context(?:\s+{Q})?$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CLEAR_CONTEXT,
        priority=863,
        extract=mapped(params={'apiContext': LiteralRef(1, optional=True)}),
        examples=['Clear API context', "Clear API context 'sessionHeaders'"],
    ),
    GrammarRule(
        id='api-set-timeout',
        pattern=rf'{_SET}timeout\s+(?:to\s+)?(\d+){_MS}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_CONTEXT,
        priority=864,
        extract=mapped(params={'timeout': GroupRef(1, convert=int)}),
        examples=['Set API timeout to 30000', 'Set API timeout 5000 ms',
                  'Set API timeout to 60000 milliseconds'],
    ),
    GrammarRule(
        id='api-set-content-type',
        pattern=rf'{_SET}content[\s-]?type\s+(?:to\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_HEADER,
        priority=865,
        extract=mapped(params={'attribute': 'Content-Type'}, value=LiteralRef(1)),
        examples=["Set API content type to 'application/xml'",
                  "Set API content-type 'multipart/form-data'"],
    ),
    GrammarRule(
        id='api-set-accept',
        pattern=rf'{_SET}accept\s+(?:header\s+)?(?:to\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SET_HEADER,
        priority=866,
        extract=mapped(params={'attribute': 'Accept'}, value=LiteralRef(1)),
        examples=["Set API accept to 'application/json'", "Set API accept header 'text/html'"],
    ),

    # Requests
    GrammarRule(
        id='api-request-get',
        pattern=rf'{_REQUEST}GET{_TO}{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=870,
        extract=mapped(params=_request('GET')),
        examples=["Send a GET request to '/api/users'", "Make GET '/api/items/1'",
                  "Execute API GET request to '/api/status'"],
    ),
    GrammarRule(
        id='api-request-post-body',
        pattern=rf'{_REQUEST}POST{_TO}{Q}\s+with\s+body\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=871,
        extract=mapped(params=_request('POST', requestBody=LiteralRef(2))),
        examples=["""Send POST request to '/api/users' with body '{"name":"John"}'""",
                  """Make a POST '/api/items' with body '{"title":"New Item"}'"""],
    ),
    GrammarRule(
        id='api-request-post-file',
        pattern=rf'{_REQUEST}POST{_TO}{Q}\s+with\s+(?:body\s+)?file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL_FILE,
        priority=872,
        extract=mapped(params=_request('POST', apiPayloadFile=LiteralRef(2))),
        examples=["Send POST request to '/api/users' with file 'payloads/create-user.json'",
                  "Make a POST '/api/items' with body file 'data/item-body.json'"],
    ),
    GrammarRule(
        id='api-request-put-body',
        pattern=rf'{_REQUEST}PUT{_TO}{Q}\s+with\s+body\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=873,
        extract=mapped(params=_request('PUT', requestBody=LiteralRef(2))),
        examples=["""Send PUT request to '/api/users/1' with body '{"name":"Updated"}'"""],
    ),
    GrammarRule(
        id='api-request-put-file',
        pattern=rf'{_REQUEST}PUT{_TO}{Q}\s+with\s+(?:body\s+)?file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL_FILE,
        priority=874,
        extract=mapped(params=_request('PUT', apiPayloadFile=LiteralRef(2))),
        examples=["Send PUT request to '/api/users/1' with file 'payloads/update-user.json'"],
    ),
    GrammarRule(
        id='api-request-patch',
        pattern=rf'{_REQUEST}PATCH{_TO}{Q}\s+with\s+body\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=875,
        extract=mapped(params=_request('PATCH', requestBody=LiteralRef(2))),
        examples=["""Send PATCH request to '/api/users/1' with body '{"email":"new@example.com"}'""",
                  """Execute PATCH request to '/api/config' with body '{"debug":true}'"""],
    ),
    GrammarRule(
        id='api-request-delete',
        pattern=rf'{_REQUEST}DELETE{_TO}{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=876,
        extract=mapped(params=_request('DELETE')),
        examples=["Send DELETE request to '/api/users/1'", "Make a DELETE '/api/items/42'"],
    ),
    GrammarRule(
        id='api-request-head',
        pattern=rf'{_REQUEST}HEAD{_TO}{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=877,
        extract=mapped(params=_request('HEAD')),
        examples=["Send HEAD request to '/api/health'", "Make a HEAD '/api/status'"],
    ),
    GrammarRule(
        id='api-upload-file',
        pattern=rf'^upload\s+file\s+{Q}\s+(?:to\s+)?(?:api\s+)?{Q}(?:\s+as\s+{Q})?$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_UPLOAD,
        priority=878,
        extract=mapped(params={
            'filePath': LiteralRef(1),
            'apiUrl': LiteralRef(2),
            'httpMethod': 'POST',
            'attribute': LiteralRef(3, optional=True),
        }),
        examples=["Upload file 'data/report.pdf' to '/api/uploads'",
                  "Upload file 'images/logo.png' to API '/api/files' as 'attachment'"],
    ),
    GrammarRule(
        id='api-download-file',
        pattern=rf'^download\s+(?:file\s+)?from\s+(?:api\s+)?{Q}(?:\s+(?:to|as)\s+{Q})?$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_DOWNLOAD,
        priority=879,
        extract=mapped(params={
            'apiUrl': LiteralRef(1),
            'httpMethod': 'GET',
            'apiResponseSavePath': LiteralRef(2, optional=True),
        }),
        examples=["Download file from API '/api/reports/123/export'",
                  "Download from '/api/files/456' to 'downloads/report.pdf'"],
    ),
    GrammarRule(
        id='api-request-post-form',
        pattern=rf'{_REQUEST}POST{_TO}{Q}\s+with\s+form\s+(?:data\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=880,
        extract=mapped(params=_request('POST', apiFormData=LiteralRef(2))),
        examples=["Send POST request to '/api/login' with form data 'username=admin&password=secret'",
                  "Make a POST '/api/form-submit' with form 'field1=value1&field2=value2'"],
    ),
    GrammarRule(
        id='api-request-post-context-body',
        pattern=rf'{_REQUEST}POST{_TO}{Q}\s+with\s+body\s+from\s+context\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=881,
        extract=mapped(params=_request('POST', apiContext=LiteralRef(2))),
        examples=["Send POST request to '/api/submit' with body from context 'requestPayload'"],
    ),
    GrammarRule(
        id='api-request-get-with-query',
        pattern=rf'{_REQUEST}GET{_TO}{Q}\s+with\s+(?:query\s+)?params?\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=882,
        extract=mapped(params=_request('GET', apiQueryParams=LiteralRef(2))),
        examples=["Send GET request to '/api/search' with query params 'q=test&page=1'",
                  "Make GET '/api/users' with params 'status=active&limit=10'"],
    ),
    GrammarRule(
        id='api-poll-until',
        pattern=rf'^poll\s+(?:api\s+)?{Q}\s+until\s+{Q}\s+(?:is|equals?)\s+{Q}{_POLL_TIMING}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_POLL,
        priority=883,
        extract=mapped(params={
            'apiUrl': LiteralRef(1),
            'httpMethod': 'GET',
            'apiPollField': LiteralRef(2),
            'apiPollExpected': LiteralRef(3),
            'apiPollInterval': GroupRef(4, optional=True, convert=int),
            'apiPollMaxTime': GroupRef(5, optional=True, convert=int),
        }),
        examples=[
            "Poll API '/api/jobs/123' until '$.status' equals 'completed' every 2000 ms max 60000 ms",
            "Poll '/api/tasks/5' until '$.state' is 'done' every 5000 timeout 120000",
            "Poll API '/api/exports/9' until '$.ready' is 'true'",
        ],
    ),
    GrammarRule(
        id='api-request-delete-body',
        pattern=rf'{_REQUEST}DELETE{_TO}{Q}\s+with\s+body\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=884,
        extract=mapped(params=_request('DELETE', requestBody=LiteralRef(2))),
        examples=["""Send DELETE request to '/api/users/1' with body '{"reason":"cleanup"}'""",
                  """Make a DELETE '/api/batch' with body '{"ids":[1,2,3]}'"""],
    ),
    GrammarRule(
        id='api-request-patch-file',
        pattern=rf'{_REQUEST}PATCH{_TO}{Q}\s+with\s+(?:body\s+)?file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL_FILE,
        priority=885,
        extract=mapped(params=_request('PATCH', apiPayloadFile=LiteralRef(2))),
        examples=["Send PATCH request to '/api/users/1' with file 'payloads/patch-user.json'"],
    ),
    GrammarRule(
        id='api-request-method-body',
        pattern=rf'{_REQUEST}(GET|POST|PUT|PATCH|DELETE|HEAD){_TO}{Q}(?:\s+with\s+body\s+{Q})?$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL,
        priority=886,
        extract=mapped(params={
            'httpMethod': GroupRef(1, convert=str.upper),
            'apiUrl': LiteralRef(2),
            'requestBody': LiteralRef(3, optional=True),
        }),
        examples=[
            "Send a POST request to '/api/ping'",
            "Execute PUT request to '/api/config/reset'",
            """Send GET request to '/api/search' with body '{"q":"shoes"}'""",
        ],
    ),
    GrammarRule(
        id='api-request-method-file',
        pattern=rf'{_REQUEST}(POST|PUT|PATCH|DELETE){_TO}{Q}\s+with\s+(?:body\s+)?file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CALL_FILE,
        priority=887,
        extract=mapped(params={
            'httpMethod': GroupRef(1, convert=str.upper),
            'apiUrl': LiteralRef(2),
            'apiPayloadFile': LiteralRef(3),
        }),
        examples=["Send DELETE request to '/api/cleanup' with body file 'payloads/cleanup-body.json'",
                  "Send DELETE request to '/api/archive' with file 'payloads/archive.json'"],
    ),

    # Response extraction
    GrammarRule(
        id='api-get-status',
        pattern=rf'{_GET_RESPONSE}status(?:\s+code)?$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=890,
        extract=mapped(params={'jsonPath': '$.statusCode'}),
        examples=['Get the API response status code', 'Get response status'],
    ),
    GrammarRule(
        id='api-get-body',
        pattern=rf'{_GET_RESPONSE}body$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=891,
        extract=mapped(params={'jsonPath': '$.body'}),
        examples=['Get the API response body', 'Get response body'],
    ),
    GrammarRule(
        id='api-get-headers',
        pattern=rf'{_GET_RESPONSE}headers$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=892,
        extract=mapped(params={'jsonPath': '$.headers'}),
        examples=['Get the API response headers', 'Get response headers'],
    ),
    GrammarRule(
        id='api-get-header',
        pattern=rf'{_GET_RESPONSE}header\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=893,
        extract=mapped(params={
            'jsonPath': FormatRef('$.headers.{name}', {'name': LiteralRef(1)}),
            'attribute': LiteralRef(1),
        }),
        examples=["Get the API response header 'Content-Type'", "Get response header 'X-Request-Id'"],
    ),
    GrammarRule(
        id='api-extract-jsonpath',
        pattern=rf'^(?:get|extract|read)\s+(?:the\s+)?(?:value\s+)?(?:at\s+)?(?:jsonpath\s+)?{Q}'
                rf'\s+from\s+(?:the\s+)?(?:api\s+)?response$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=894,
        extract=mapped(params={'jsonPath': LiteralRef(1)}),
        examples=["Get value at JSONPath '$.data.id' from the API response",
                  "Extract '$.items[0].name' from response",
                  "Read the value '$.total' from API response"],
    ),
    GrammarRule(
        id='api-extract-all-jsonpath',
        pattern=rf'^(?:get|extract)\s+all\s+(?:values?\s+)?(?:at\s+)?(?:jsonpath\s+)?{Q}'
                rf'\s+from\s+(?:the\s+)?(?:api\s+)?response$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=895,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'all'}),
        examples=["Get all values at JSONPath '$.items[*].name' from the API response",
                  "Extract all '$.users[*].email' from response"],
    ),
    GrammarRule(
        id='api-get-response-time',
        pattern=rf'{_GET_RESPONSE}time$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=896,
        extract=mapped(params={'jsonPath': '$.responseTime'}),
        examples=['Get the API response time', 'Get response time'],
    ),
    GrammarRule(
        id='api-get-cookies',
        pattern=rf'{_GET_RESPONSE}cookies$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=897,
        extract=mapped(params={'jsonPath': '$.cookies'}),
        examples=['Get the API response cookies', 'Get response cookies'],
    ),
    GrammarRule(
        id='api-save-response',
        pattern=rf'^save\s+(?:the\s+)?(?:api\s+)?response\s+(?:to|as)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SAVE_RESPONSE,
        priority=898,
        extract=mapped(params={'apiResponseSavePath': LiteralRef(1)}),
        examples=["Save the API response to 'responses/user-data.json'",
                  "Save response as 'output/result.json'"],
    ),
    GrammarRule(
        id='api-save-request',
        pattern=rf'^save\s+(?:the\s+)?(?:api\s+)?(?:last\s+)?request\s+(?:to|as)\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SAVE_REQUEST,
        priority=899,
        extract=mapped(params={'apiResponseSavePath': LiteralRef(1)}),
        examples=["Save the API request to 'requests/last-request.json'",
                  "Save the last request as 'debug/request.json'"],
    ),
    GrammarRule(
        id='api-print-response-body',
        pattern=rf'{_PRINT}response\s+body$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_PRINT,
        priority=900,
        extract=mapped(params={'apiPrintTarget': 'body'}),
        examples=['Print the API response body', 'Print response body'],
    ),
    GrammarRule(
        id='api-print-response-headers',
        pattern=rf'{_PRINT}response\s+headers$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_PRINT,
        priority=901,
        extract=mapped(params={'apiPrintTarget': 'response-headers'}),
        examples=['Print the API response headers', 'Print response headers'],
    ),
    GrammarRule(
        id='api-print-last-request',
        pattern=rf'{_PRINT}(?:last\s+)?request$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_PRINT,
        priority=902,
        extract=mapped(params={'apiPrintTarget': 'request'}),
        examples=['Print the API last request', 'Print the request', 'Print last request'],
    ),
    GrammarRule(
        id='api-print-request-headers',
        pattern=rf'{_PRINT}request\s+headers$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_PRINT,
        priority=903,
        extract=mapped(params={'apiPrintTarget': 'request-headers'}),
        examples=['Print the API request headers', 'Print request headers'],
    ),
    GrammarRule(
        id='api-extract-from-stored',
        pattern=rf'^(?:get|extract|read)\s+(?:the\s+)?(?:value\s+)?{Q}\s+from\s+(?:the\s+)?'
                rf'stored\s+response\s+{Q}$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=904,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'apiResponseSavePath': LiteralRef(2)}),
        examples=["Get value '$.data.id' from stored response 'userResponse'",
                  "Extract '$.token' from the stored response 'loginResult'"],
    ),

    # Response assertions
    GrammarRule(
        id='api-verify-status',
        pattern=rf'{_VERIFY_RESPONSE}status\s+(?:code\s+)?(?:is|equals?)\s+(\d+)$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=910,
        extract=mapped(params={'httpMethod': 'STATUS'}, expected_value=GroupRef(1)),
        examples=['Verify the API response status is 200',
                  'Verify that response status code equals 201',
                  'Verify response status is 404'],
    ),
    GrammarRule(
        id='api-verify-status-range',
        pattern=rf'{_VERIFY_RESPONSE}status\s+(?:code\s+)?is\s+(?:in\s+)?(?:the\s+)?(\d)xx$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=911,
        extract=mapped(params={'httpMethod': 'STATUS_RANGE'},
                       expected_value=FormatRef('{digit}xx', {'digit': GroupRef(1)})),
        examples=['Verify the API response status is 2xx', 'Verify response status code is in the 4xx'],
    ),
    GrammarRule(
        id='api-verify-header-exists',
        pattern=rf'{_VERIFY_RESPONSE}(?:has|contains?)\s+header\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=912,
        extract=mapped(params={'attribute': LiteralRef(1), 'comparisonOp': 'exists'}),
        examples=["Verify the API response has header 'Content-Type'",
                  "Verify that response contains header 'X-Request-Id'"],
    ),
    GrammarRule(
        id='api-verify-header-value',
        pattern=rf'{_VERIFY_RESPONSE}header\s+{Q}\s+(?:is|equals?)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=913,
        extract=mapped(params={'attribute': LiteralRef(1), 'comparisonOp': 'equals'},
                       expected_value=LiteralRef(2)),
        examples=["Verify the API response header 'Content-Type' is 'application/json'",
                  "Verify that response header 'Cache-Control' equals 'no-cache'"],
    ),
    GrammarRule(
        id='api-verify-body-contains',
        pattern=rf'{_VERIFY_RESPONSE}(?:body\s+)?contains?\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=914,
        extract=mapped(params={'comparisonOp': 'contains'}, expected_value=LiteralRef(1)),
        examples=["Verify the API response body contains 'success'",
                  "Verify that response contains 'created'"],
    ),
    GrammarRule(
        id='api-verify-body-not-contains',
        pattern=rf'{_VERIFY_RESPONSE}(?:body\s+)?does\s+not\s+contain\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=915,
        extract=mapped(params={'comparisonOp': 'not-contains'}, expected_value=LiteralRef(1),
                       modifiers=_NEGATED),
        examples=["Verify the API response body does not contain 'error'",
                  "Verify that response does not contain 'unauthorized'"],
    ),
    GrammarRule(
        id='api-verify-jsonpath-equals',
        pattern=rf'{_JSONPATH}(?:is|equals?)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=916,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'equals'},
                       expected_value=LiteralRef(2)),
        examples=["Verify the API response '$.data.name' equals 'John'",
                  "Verify that response JSONPath '$.status' is 'active'"],
    ),
    GrammarRule(
        id='api-verify-jsonpath-contains',
        pattern=rf'{_JSONPATH}contains?\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=917,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'contains'},
                       expected_value=LiteralRef(2)),
        examples=["Verify response JSONPath '$.message' contains 'success'"],
    ),
    GrammarRule(
        id='api-verify-jsonpath-exists',
        pattern=rf'{_JSONPATH}exists$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=918,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'exists'}),
        examples=["Verify the API response '$.data.id' exists",
                  "Verify that response JSONPath '$.token' exists"],
    ),
    GrammarRule(
        id='api-verify-jsonpath-not-exists',
        pattern=rf'{_JSONPATH}does\s+not\s+exist$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=919,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'not-exists'},
                       modifiers=_NEGATED),
        examples=["Verify the API response '$.data.password' does not exist",
                  "Verify that response JSONPath '$.secret' does not exist"],
    ),
    GrammarRule(
        id='api-verify-jsonpath-count',
        pattern=rf'{_JSONPATH}count\s+(?:is|equals?)\s+(\d+)$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=920,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'count'},
                       expected_value=GroupRef(2)),
        examples=["Verify the API response '$.data.items' count is 5",
                  "Verify response JSONPath '$.users' count equals 3"],
    ),
    GrammarRule(
        id='api-verify-jsonpath-gt',
        pattern=rf'{_JSONPATH}is\s+greater\s+than\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=921,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'greater-than'},
                       expected_value=LiteralRef(2)),
        examples=["Verify the API response '$.data.total' is greater than '0'"],
    ),
    GrammarRule(
        id='api-verify-jsonpath-type',
        pattern=rf'{_JSONPATH}(?:is\s+(?:of\s+)?type|has\s+type)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=922,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'type'},
                       expected_value=LiteralRef(2)),
        examples=["Verify the API response '$.data.id' is of type 'number'",
                  "Verify response JSONPath '$.items' has type 'array'",
                  "Verify that response '$.name' is type 'string'"],
    ),
    GrammarRule(
        id='api-verify-jsonpath-matches',
        pattern=rf'{_JSONPATH}matches?\s+(?:pattern\s+)?{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=923,
        extract=mapped(params={
            'jsonPath': LiteralRef(1),
            'regexPattern': LiteralRef(2),
            'comparisonOp': 'matches',
        }),
        examples=[r"Verify the API response '$.data.email' matches pattern '^[\w.]+@[\w]+\.[a-z]+$'",
                  "Verify response JSONPath '$.id' matches '^[0-9a-f-]+$'"],
    ),
    GrammarRule(
        id='api-verify-schema',
        pattern=rf'{_VERIFY_RESPONSE}matches?\s+schema\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_SCHEMA,
        priority=924,
        extract=mapped(params={'apiSchemaFile': LiteralRef(1)}),
        examples=["Verify the API response matches schema 'schemas/user-response.json'",
                  "Verify that response matches schema 'schemas/item-list.json'"],
    ),
    GrammarRule(
        id='api-verify-response-time',
        pattern=rf'{_VERIFY_RESPONSE}time\s+is\s+(?:less\s+than|under|below)\s+(\d+){_MS}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=925,
        extract=mapped(params={'comparisonOp': 'response-time-lt'}, expected_value=GroupRef(1)),
        examples=['Verify the API response time is less than 2000 ms',
                  'Verify that response time is under 500',
                  'Verify response time is below 1000 milliseconds'],
    ),
    GrammarRule(
        id='api-verify-matches-db',
        pattern=rf'{_JSONPATH}matches?\s+database\s+{Q}\s+query\s+{Q}\s+field\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DATA_MATCH,
        priority=926,
        extract=mapped(params={
            'jsonPath': LiteralRef(1),
            'dbAlias': LiteralRef(2),
            'dbQuery': LiteralRef(3),
            'dbField': LiteralRef(4),
            'comparisonOp': 'equals',
        }),
        examples=["Verify the API response '$.data.name' matches database 'PRIMARY_DB' "
                  "query 'GET_USER' field 'name'"],
    ),
    GrammarRule(
        id='api-verify-matches-context',
        pattern=rf'{_JSONPATH}matches?\s+context\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_DATA_MATCH,
        priority=927,
        extract=mapped(params={
            'jsonPath': LiteralRef(1),
            'sourceContextVar': LiteralRef(2),
            'comparisonOp': 'equals',
        }),
        examples=["Verify the API response '$.data.id' matches context 'expectedId'",
                  "Verify that response '$.total' matches context 'calculatedTotal'"],
    ),
    GrammarRule(
        id='api-verify-body-empty',
        pattern=rf'{_VERIFY_RESPONSE}body\s+is\s+empty$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=928,
        extract=mapped(params={'comparisonOp': 'empty'}),
        examples=['Verify the API response body is empty', 'Verify that response body is empty'],
    ),
    GrammarRule(
        id='api-verify-redirect',
        pattern=rf'{_VERIFY_RESPONSE}(?:is\s+a\s+)?redirect(?:s?\s+to\s+{Q})?$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=929,
        extract=mapped(params={'comparisonOp': 'redirect'},
                       expected_value=LiteralRef(1, optional=True)),
        examples=['Verify the API response is a redirect',
                  "Verify that response redirects to 'https://example.com/login'"],
    ),
    GrammarRule(
        id='api-verify-body-not-empty',
        pattern=rf'{_VERIFY_RESPONSE}body\s+is\s+not\s+empty$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=930,
        extract=mapped(params={'comparisonOp': 'not-empty'}, modifiers=_NEGATED),
        examples=['Verify the API response body is not empty', 'Verify that response body is not empty'],
    ),
    GrammarRule(
        id='api-verify-jsonpath-lt',
        pattern=rf'{_JSONPATH}is\s+less\s+than\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=931,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'comparisonOp': 'less-than'},
                       expected_value=LiteralRef(2)),
        examples=["Verify the API response '$.data.count' is less than '100'",
                  "Verify response JSONPath '$.retries' is less than '5'"],
    ),
    GrammarRule(
        id='api-verify-content-type',
        pattern=rf'{_VERIFY_RESPONSE}content[\s-]?type\s+(?:is|equals?)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=932,
        extract=mapped(params={'attribute': 'Content-Type', 'comparisonOp': 'equals'},
                       expected_value=LiteralRef(1)),
        examples=["Verify the API response content-type is 'application/json'",
                  "Verify that response content type equals 'text/xml'"],
    ),

    # Chaining
    GrammarRule(
        id='api-extract-and-set-bearer',
        pattern=rf'^extract\s+(?:and\s+)?set\s+bearer\s+(?:token\s+)?from\s+(?:response\s+)?'
                rf'(?:jsonpath\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CHAIN,
        priority=935,
        extract=mapped(params={'jsonPath': LiteralRef(1), 'apiAuthType': 'bearer'}),
        examples=["Extract and set bearer token from response JSONPath '$.data.token'",
                  "Extract set bearer from '$.access_token'"],
    ),
    GrammarRule(
        id='api-store-cookies',
        pattern=rf'^store\s+(?:api\s+)?response\s+cookies\s+(?:to|as|in)\s+context\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CHAIN,
        priority=936,
        extract=mapped(params={'apiContext': LiteralRef(1), 'jsonPath': '$.cookies'}),
        examples=["Store API response cookies to context 'sessionCookies'",
                  "Store response cookies as context 'authCookies'"],
    ),
    GrammarRule(
        id='api-login-flow',
        pattern=rf'^(?:execute|run)\s+api\s+login\s+(?:flow\s+)?(?:to\s+)?{Q}\s+with\s+body\s+{Q}'
                rf'\s+(?:and\s+)?(?:extract|save)\s+(?:token\s+from\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CHAIN,
        priority=937,
        extract=mapped(params={
            'httpMethod': 'POST',
            'apiUrl': LiteralRef(1),
            'requestBody': LiteralRef(2),
            'jsonPath': LiteralRef(3),
            'apiAuthType': 'bearer',
        }),
        examples=[
            """Execute API login flow to '/api/auth/login' with body '{"user":"admin","pass":"secret"}' """
            """and extract token from '$.token'""",
            """Run API login '/api/login' with body '{"email":"test@example.com"}' extract '$.data.jwt'""",
        ],
    ),
    GrammarRule(
        id='api-set-body-from-response',
        pattern=rf'^set\s+(?:next\s+)?(?:api\s+)?request\s+body\s+from\s+(?:previous\s+)?response\s+'
                rf'(?:jsonpath\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_CHAIN,
        priority=938,
        extract=mapped(params={'jsonPath': LiteralRef(1)}),
        examples=["Set next API request body from previous response JSONPath '$.data'",
                  "Set request body from response '$.payload'"],
    ),
    GrammarRule(
        id='api-execute-chain-file',
        pattern=rf'^(?:execute|run)\s+api\s+chain\s+(?:from\s+)?(?:file\s+)?{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_EXECUTE_CHAIN,
        priority=939,
        extract=mapped(params={'apiChainFile': LiteralRef(1)}),
        examples=["Execute API chain from file 'chains/user-create-flow.json'",
                  "Run API chain 'chains/order-workflow.yaml'"],
    ),
    GrammarRule(
        id='api-retry-until',
        pattern=rf'^retry\s+(?:api\s+)?(GET|POST|PUT|PATCH|DELETE)\s+{Q}\s+until\s+{Q}\s+'
                rf'(?:is|equals?)\s+{Q}{_POLL_TIMING}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_POLL,
        priority=940,
        extract=mapped(params={
            'httpMethod': GroupRef(1, convert=str.upper),
            'apiUrl': LiteralRef(2),
            'apiPollField': LiteralRef(3),
            'apiPollExpected': LiteralRef(4),
            'apiPollInterval': GroupRef(5, optional=True, convert=int),
            'apiPollMaxTime': GroupRef(6, optional=True, convert=int),
        }),
        examples=[
            "Retry API GET '/api/jobs/123' until '$.status' equals 'completed' every 3000 ms max 90000 ms",
            "Retry POST '/api/process' until '$.state' is 'done' every 5000 timeout 60000",
            "Retry GET '/api/imports/4' until '$.phase' is 'loaded'",
        ],
    ),

    # SOAP
    GrammarRule(
        id='api-soap-call',
        pattern=rf'^(?:send|make|execute|call)\s+(?:a\s+)?soap{_TO}{Q}\s+operation\s+{Q}'
                rf'(?:\s+with\s+(?:params?\s+)?{Q})?$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SOAP,
        priority=945,
        extract=mapped(params={
            'apiUrl': LiteralRef(1),
            'soapOperation': LiteralRef(2),
            'soapParams': LiteralRef(3, optional=True),
        }),
        examples=[
            """Send SOAP request to 'https://ws.example.com/service' operation 'GetUser' with params '{"id":1}'""",
            "Call SOAP 'https://api.example.com/ws' operation 'ListItems'",
        ],
    ),
    GrammarRule(
        id='api-soap-from-file',
        pattern=rf'^(?:send|make|execute|call)\s+(?:a\s+)?soap{_TO}{Q}\s+(?:from|with)\s+file\s+{Q}$',
        category=StepCategory.ACTION,
        intent=StepIntent.API_SOAP,
        priority=946,
        extract=mapped(params={'apiUrl': LiteralRef(1), 'apiPayloadFile': LiteralRef(2)}),
        examples=["Send SOAP request to 'https://ws.example.com/service' from file 'soap/get-user-request.xml'",
                  "Call SOAP 'https://api.example.com/ws' with file 'soap/create-order.xml'"],
    ),
    GrammarRule(
        id='api-verify-xpath',
        pattern=rf'^verify\s+(?:that\s+)?(?:the\s+)?(?:api\s+)?(?:soap\s+)?response\s+xpath\s+{Q}'
                rf'\s+(?:is|equals?)\s+{Q}$',
        category=StepCategory.ASSERTION,
        intent=StepIntent.VERIFY_API_RESPONSE,
        priority=947,
        extract=mapped(params={'xpathExpression': LiteralRef(1), 'comparisonOp': 'equals'},
                       expected_value=LiteralRef(2)),
        examples=["Verify the SOAP response XPath '//user/name' equals 'John'",
                  "Verify that API response XPath '//status' is 'success'"],
    ),
    GrammarRule(
        id='api-extract-xpath',
        pattern=rf'^(?:get|extract|read)\s+(?:the\s+)?(?:value\s+)?(?:at\s+)?xpath\s+{Q}\s+from\s+'
                rf'(?:the\s+)?(?:api\s+)?(?:soap\s+)?response$',
        category=StepCategory.QUERY,
        intent=StepIntent.GET_API_RESPONSE,
        priority=948,
        extract=mapped(params={'xpathExpression': LiteralRef(1)}),
        examples=["Get value at XPath '//user/email' from the SOAP response",
                  "Extract XPath '//order/total' from the API response"],
    ),
]

API_TABLE = GrammarTable('api', (850, 949), API_RULES)
