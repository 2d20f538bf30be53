"""Hello Nattramn — two pages sharing one template.

The first request gets a full document.  Clicking a ``<nattramn-link>``
makes the client router ask for ``/about`` with ``x-partial-content``,
and only the page body comes back (the title travels in a header).

Run:
    python app.py
"""

from pathlib import Path

from nattramn import Nattramn, PageData

PUBLIC = Path(__file__).parent / "public"

template = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="stylesheet" href="style.css">
</head>
<body>
  <nattramn-router></nattramn-router>
  <script type="module" src="nattramn-client.js"></script>
</body>
</html>"""

app = Nattramn({"server": {"serveStatic": PUBLIC}})


@app.page("/", template)
async def home(request, params):
    return PageData(
        head="<title>Home - Nattramn</title>",
        body="""
            <h1>Nattramn</h1>
            <h2>Home</h2>
            <p>Read <nattramn-link href="/about">about me.</nattramn-link></p>
        """,
    )


@app.page("/about", template)
async def about(request, params):
    return {
        "head": "<title>About - Nattramn</title>",
        "body": """
            <h1>Nattramn</h1>
            <h2>About</h2>
            <p>The Nattramn only occasionally shows himself.</p>
        """,
    }


@app.page("/greet/:name", template)
async def greet(request, params):
    return PageData(head=f"<title>Hello {params['name']}</title>", body=f"<p>Hello, {params['name']}!</p>")


if __name__ == "__main__":
    app.start_server(5000)
