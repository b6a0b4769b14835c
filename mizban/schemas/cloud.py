"""
Cloud (IaaS) Schemas.

Servers, volumes, snapshots, SSH keys, firewalls and private networks
under /v1/cloud.
"""

from mizban.schemas.base import RequestBody, Resource


# =============================================================================
# Servers
# =============================================================================


class Server(Resource):
    id: int = 0
    name: str = ""
    status: str = ""
    cpu: int = 0
    ram: int = 0
    storage: int = 0
    os: str = ""
    public_ip: str = ""
    private_ip: str = ""
    datacenter_id: int = 0
    created_at: str = ""


class ServerLog(Resource):
    action: str = ""
    status: str = ""
    created_at: str = ""


class VNCAccess(Resource):
    url: str = ""


class ServerCreateRequest(RequestBody):
    name: str
    os: str
    cpu: int
    ram: int
    storage: int
    datacenter_id: int
    ssh_key_id: int | None = None


class RenameRequest(RequestBody):
    name: str


class RebuildRequest(RequestBody):
    os: str


# =============================================================================
# Volumes
# =============================================================================


class Volume(Resource):
    id: int = 0
    name: str = ""
    size: int = 0
    status: str = ""
    server_id: int = 0
    created_at: str = ""


class VolumeCreateRequest(RequestBody):
    name: str
    size: int
    datacenter_id: int


class VolumeAttachRequest(RequestBody):
    volume_id: str
    server_id: int


class VolumeResizeRequest(RequestBody):
    size: int


# =============================================================================
# Snapshots
# =============================================================================


class Snapshot(Resource):
    id: int = 0
    name: str = ""
    size: int = 0
    status: str = ""
    server_id: int = 0
    created_at: str = ""


class SnapshotCreateRequest(RequestBody):
    name: str
    server_id: int


# =============================================================================
# SSH keys
# =============================================================================


class SSHKey(Resource):
    id: int = 0
    name: str = ""
    fingerprint: str = ""
    public_key: str = ""
    created_at: str = ""


class GeneratedSSHKey(Resource):
    id: int = 0
    private_key: str = ""
    public_key: str = ""


class SSHKeyCreateRequest(RequestBody):
    name: str
    public_key: str


# =============================================================================
# Firewalls
# =============================================================================


class FirewallRule(Resource):
    id: int = 0
    direction: str = ""
    protocol: str = ""
    port_min: int = 0
    port_max: int = 0
    remote_ip: str = ""


class Firewall(Resource):
    id: int = 0
    name: str = ""
    rules: list[FirewallRule] = []
    servers: list[int] = []
    created_at: str = ""


class FirewallCreateRequest(RequestBody):
    name: str


class FirewallRuleCreateRequest(RequestBody):
    firewall_id: int
    direction: str
    protocol: str
    port_min: int
    port_max: int
    remote_ip: str


class FirewallAttachRequest(RequestBody):
    firewall_id: str
    server_id: int


# =============================================================================
# Private networks
# =============================================================================


class PrivateNetwork(Resource):
    id: int = 0
    name: str = ""
    cidr: str = ""
    gateway: str = ""
    servers: list[int] = []
    created_at: str = ""


class NetworkCreateRequest(RequestBody):
    name: str
    cidr: str
    datacenter_id: int


class NetworkAttachRequest(RequestBody):
    network_id: str
    server_id: int
    ip: str | None = None
