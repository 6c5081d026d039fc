"""
Example: POST a multipart/form-data body to a handler in-process

The handler parses the form with python-multipart, exactly as it would for a
request coming off the wire. No server is started.
"""

import tempfile
from pathlib import Path

import click
from python_multipart import parse_form

from handlertest import MultipartBody, Response, extract_body_to_string, post_multipart


class UploadHandler:
    """Replies with a summary of the fields and files it received."""

    def handle(self, request):
        fields, files = {}, {}

        def on_field(field):
            fields[field.field_name.decode()] = field.value.decode()

        def on_file(file):
            file.file_object.seek(0)
            files[file.field_name.decode()] = (file.file_name.decode(), len(file.file_object.read()))

        parse_form(request.headers.to_dict(), request.body, on_field, on_file)
        lines = [f"field {k}={v}" for k, v in fields.items()]
        lines += [f"file {k}={name} ({size} bytes)" for k, (name, size) in files.items()]
        return Response(200, "\n".join(lines))


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "file.txt"
        path.write_bytes(b"Hello, world!")

        body = MultipartBody()
        body.write("title", "my song")
        body.upload("track", path)

        response = post_multipart("http://localhost:3000/songs", UploadHandler(), body)

    click.secho(f"Status: {response.status_code}", fg="green")
    click.echo(extract_body_to_string(response))


if __name__ == "__main__":
    main()
