"""Server lifecycle: bind, announce, open the browser and serve until stopped.

The tree is complete before this module is entered; serving never overlaps
with scanning.
"""

from __future__ import annotations

import socket
import threading
import webbrowser
from typing import Optional

from rich.console import Console

from ..config import VduConfig
from ..logging_config import get_logger
from ..tree import PathTree
from .app import create_app
from .bundle import StaticBundle

logger = get_logger(__name__)

BROWSER_DELAY_SECONDS = 1.0


def bind_socket(host: str, port: int) -> socket.socket:
    """Open a listening TCP socket; port 0 lets the OS choose."""
    infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
    family, socktype, proto, _, address = infos[0]
    sock = socket.socket(family, socktype, proto)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind(address)
    except OSError:
        sock.close()
        raise
    return sock


def server_url(host: str, port: int) -> str:
    if ":" in host:
        host = f"[{host}]"
    return f"http://{host}:{port}/"


def launch_server(
    tree: PathTree,
    config: VduConfig,
    console: Optional[Console] = None,
    verbose: bool = False,
) -> None:
    """Serve ``tree`` until interrupted.

    One uvicorn worker on one event loop; the handlers never await, so
    requests are answered one at a time against the read-only tree.
    """
    import uvicorn

    console = console or Console()
    bundle = StaticBundle.load(config.bundle_path)
    asgi_app = create_app(tree, bundle)

    sock = bind_socket(config.host, config.port)
    port = sock.getsockname()[1]
    url = server_url(config.host, port)
    logger.info("visit %s to see results", url)

    if config.open_browser:
        logger.info("opening browser")
        threading.Timer(BROWSER_DELAY_SECONDS, lambda: webbrowser.open(url)).start()

    console.print(f"[bold]Treemap[/bold] -> [link={url}]{url}[/link]")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    server = uvicorn.Server(
        uvicorn.Config(
            asgi_app,
            log_level="info" if verbose else "warning",
            workers=1,
        )
    )
    try:
        server.run(sockets=[sock])
    except KeyboardInterrupt:
        pass
    finally:
        sock.close()
        console.print("\n[dim]Stopped.[/dim]")
