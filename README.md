# restauth

A small REST client built on `requests`. Each call is shaped by *plugins*:
small functions that take the outgoing `restauth.client.Request` and set its
path, query parameters, headers or body. Authentication is added by request
updaters, so the same client works with basic auth, bearer tokens or OIDC
tokens fetched per realm.

## Installation

```
pip install restauth
```

## Making requests

```python
from restauth.client import Client, path, body_json, body_string, set_header, create_query_plugins

# The timeout is in seconds, or a datetime.timedelta
client = Client("http://localhost:8080/api", 30)

# GET: the decoded body is returned
users = client.get(path("/users"), *create_query_plugins("first", "0", "max", "10"))

# POST: returns the Location header ("" if absent) and the decoded body
location, body = client.post(path("/users"), body_json({"username": "alice"}))

client.put(path("/users/42"), body_json({"enabled": False}))
client.delete(path("/users/42"))
```

The plugins available in `restauth.client` are:

- `path(value)` – replaces the path of the client's URL;
- `add_query(key, value)` – appends a query parameter;
- `create_query_plugins(*args)` – builds `add_query` plugins from alternating
  keys and values; a trailing key without a value is ignored;
- `set_header(name, value)` – sets a request header;
- `body_string(text)` – sends the text, UTF-8 encoded, as the body;
- `body_json(obj)` – sends the JSON encoding of `obj` and sets
  `Content-Type: application/json`.

A plugin is any callable taking a `Request`, so writing your own is easy.

### Decoding responses

The body returned by `get` and `post` depends on the media type of the
response's `Content-Type`:

| Media type | Result |
|---|---|
| `application/json` | decoded JSON |
| `text/plain`, `text/html` | `str` |
| `application/octet-stream`, `application/zip`, `application/pdf`, `text/xml` | `bytes` |
| anything else, empty body | `None` |
| anything else, non-empty body | raises `UnknownContentTypeError` |

### Errors

All errors derive from `restauth.errors.HttpClientError`.

- A status of 401, any status of 400 and above, or a status below 200 raises
  `HTTPError`. For statuses of 400 and above other than 401, when the body is
  a JSON object holding a string `errorMessage`, that text becomes the error's
  message; otherwise the raw body is used.
- `ResponseUnavailableError` is raised when the server cannot be reached.
- `HttpClientError` itself is raised when the API address cannot be parsed.

```python
from restauth.errors import HTTPError

try:
    client.get(path("/missing"))
except HTTPError as err:
    print(err.status_code, err.message, err.is_error_from_client())
    print(str(err))  # "404:<message>"
```

`HTTPError` also offers `is_success()`, `is_error()` and
`is_error_from_server()`, and compares equal to another `HTTPError` with the
same status code and message.

## Authentication

### Request updaters

Extra arguments to `Client` are request updaters: callables that take a
`Request` and return it, run on every request before the plugins.
`Request.set_header` returns the request, so it fits here directly:

```python
client = Client("http://localhost:8080/api", 30, lambda req: req.set_header("X-Tenant", "demo"))
```

`restauth.authorization` builds such clients for you:

```python
from restauth.authorization import basic_auth_client, bearer_auth_client

password = "password"
basic = basic_auth_client("http://localhost:8080/api", 30, "user", password)

# The provider is called before every request
bearer = bearer_auth_client("http://localhost:8080/api", 30, lambda: "token")
```

### Sending a given access token

`set_access_token(access_token)` returns a plugin that sends the token as a
bearer token, sets `X-Forwarded-Proto: https`, and sends a `Host` header taken
from the token's `iss` claim. `host_from_token(token)` returns that host on its
own. Both raise `TokenError` when the token cannot be decoded or its issuer is
not a string.

```python
from restauth.authorization import set_access_token

# access_token holds a JWT whose "iss" claim is an URL
client.get(path("/me"), set_access_token(access_token))
```

### Tokens per realm

`MultiRealmTokenClient` asks an `OidcTokenProvider` for a token before each
call and sends it as a bearer token. Without a realm it uses
`provide_token()`; a client returned by `for_realm(name)` uses
`provide_token_for_realm(name)`. Errors raised by the provider propagate
unchanged, and no request is sent.

```python
from restauth.multi_realm import MultiRealmTokenClient, OidcTokenProvider

class Provider(OidcTokenProvider):
    def provide_token(self):
        return "token"

    def provide_token_for_realm(self, realm):
        return "token"

client = MultiRealmTokenClient("http://localhost:8080/api", 30, Provider())
client.for_realm("my-realm").get(path("/users"))
```

## What it does not do

- Tokens are decoded without checking their signature or expiry; the package
  only reads the issuer from them.
- It does not fetch, cache or refresh tokens itself: that is the job of the
  token provider you pass in.
- There are no retries, sessions or connection pooling between calls; each
  call is one `requests` request.

## Running the tests

```
pip install restauth[test]
pytest
```