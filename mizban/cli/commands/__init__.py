"""
CLI Commands.

Organized by product area: account, cloud servers and networking, CDN
domains and their per-domain features, and support tickets.
"""

from mizban.cli.commands.access_rules import app as access_rules_app
from mizban.cli.commands.auth import login, logout
from mizban.cli.commands.cache import app as cache_app
from mizban.cli.commands.cluster import app as cluster_app
from mizban.cli.commands.custom_pages import app as custom_pages_app
from mizban.cli.commands.ddos import app as ddos_app
from mizban.cli.commands.dns import app as dns_app
from mizban.cli.commands.domain import app as domain_app
from mizban.cli.commands.firewall import app as firewall_app
from mizban.cli.commands.log_forwarder import app as log_forwarder_app
from mizban.cli.commands.network import app as network_app
from mizban.cli.commands.page_rules import app as page_rules_app
from mizban.cli.commands.plan import app as plan_app
from mizban.cli.commands.profile import app as profile_app
from mizban.cli.commands.ratelimit import app as ratelimit_app
from mizban.cli.commands.server import app as server_app
from mizban.cli.commands.snapshot import app as snapshot_app
from mizban.cli.commands.ssh import app as ssh_app
from mizban.cli.commands.ssl import app as ssl_app
from mizban.cli.commands.ticket import app as ticket_app
from mizban.cli.commands.volume import app as volume_app
from mizban.cli.commands.waf import app as waf_app

__all__ = [
    "access_rules_app",
    "cache_app",
    "cluster_app",
    "custom_pages_app",
    "ddos_app",
    "dns_app",
    "domain_app",
    "firewall_app",
    "log_forwarder_app",
    "login",
    "logout",
    "network_app",
    "page_rules_app",
    "plan_app",
    "profile_app",
    "ratelimit_app",
    "server_app",
    "snapshot_app",
    "ssh_app",
    "ssl_app",
    "ticket_app",
    "volume_app",
    "waf_app",
]
