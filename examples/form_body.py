"""
Example: urlencoded form bodies

A dict body is encoded as application/x-www-form-urlencoded and the
Content-Type header is set automatically.
"""

import click
from python_multipart import parse_form

from handlertest import HandlerClient, Response


def greet(request):
    fields = {}

    def on_field(field):
        fields[field.field_name.decode()] = field.value.decode()

    parse_form(request.headers.to_dict(), request.body, on_field, None)
    return Response(200, f"{fields['first_name']} {fields['last_name']}")


def main() -> None:
    client = HandlerClient(greet, headers={"Accept": "text/plain"})
    response = client.post("/users", {"first_name": "Example", "last_name": "User"})
    click.secho(f"Status: {response.status_code}", fg="green")
    click.echo(f"Response: {response.text}")


if __name__ == "__main__":
    main()
