"""
CDN Schemas.

Domains and every per-domain feature under /v1/cdn/ng/domains: DNS, SSL,
cache, WAF, load-balancer clusters, DDoS, rate limiting, access rules,
custom error pages, page rules and log forwarders.

The CDN backend is inconsistent about booleans (true, 1 and "1" all occur),
so flags that arrive that way use TolerantBool.
"""

from typing import Any

from pydantic import Field

from mizban.schemas.base import (
    EnabledRequest,
    RequestBody,
    Resource,
    TolerantBool,
    TolerantString,
)


# =============================================================================
# Domains
# =============================================================================


class Nameservers(Resource):
    """Nameservers assigned by MizbanCloud. The IPs may arrive as arrays."""

    ns1: str = ""
    ns2: str = ""
    ip1: TolerantString = ""
    ip2: TolerantString = ""


class CurrentNameservers(Resource):
    ns1: str = ""
    ns2: str = ""


class Domain(Resource):
    id: int = 0
    name: str = ""
    domain: str = ""
    status: str = ""
    plan: str = ""
    plan_display_name: str = ""
    waf_enabled: TolerantBool = Field(False, alias="waf-enabled")
    dnssec_enabled: TolerantBool = False
    h3_enabled: TolerantBool = False
    supports_websocket: TolerantBool = False
    nameservers: Nameservers | None = None
    current_nameservers: CurrentNameservers | None = None
    added_at: str = ""
    created_at: str = ""
    updated_at: str = ""

    @property
    def display_name(self) -> str:
        return self.name or self.domain


class DomainUsage(Resource):
    traffic: int = 0
    requests: int = 0
    bandwidth: int = 0


class WhoisInfo(Resource):
    registrar: str = ""
    creation_date: str = ""
    expiry_date: str = ""
    nameservers: list[str] = Field(default_factory=list)
    status: str = ""


class DomainReport(Resource):
    total_traffic: int = 0
    total_requests: int = 0
    cache_hit_ratio: float = 0.0
    bandwidth_peak: int = 0


class DomainCreateRequest(RequestBody):
    domain: str


class PeriodRequest(RequestBody):
    period: str


class ModeRequest(RequestBody):
    mode: str


class TTLRequest(RequestBody):
    ttl: int


class ModeTTLRequest(RequestBody):
    mode: str
    ttl: int


# =============================================================================
# DNS
# =============================================================================


class DNSRecord(Resource):
    id: int = 0
    type: str = ""
    name: str = ""
    content: str = ""
    ttl: int = 0
    priority: int = 0
    port: int = 0
    protocol: str = ""
    proxy: str = ""

    @property
    def proxied(self) -> bool:
        return self.proxy == "ACTIVE"


class FetchedRecords(Resource):
    records: list[DNSRecord] = Field(default_factory=list)
    count: int = 0


class ZoneExport(Resource):
    zone: str = ""


class CustomNameservers(Resource):
    ns1: str = ""
    ns2: str = ""
    enabled: TolerantBool = False


class DNSSECStatus(Resource):
    enabled: TolerantBool = False
    algorithm: str = ""
    ds: str = ""
    key_tag: int = 0
    digest_type: str = ""
    digest: str = ""


class DNSRecordRequest(RequestBody):
    """Body for creating or updating a record. priority and port are sent only when positive."""

    record_id: int | None = None
    type: str
    name: str
    destination: str
    ttl: int
    protocol: str
    proxy: bool
    priority: int | None = None
    port: int | None = None


class ZoneImportRequest(RequestBody):
    zone: str


class CustomNameserversRequest(RequestBody):
    ns1: str
    ns2: str


# =============================================================================
# SSL / HTTPS
# =============================================================================


class SSLCertificate(Resource):
    id: int = 0
    type: str = ""
    status: str = ""
    expires_at: str = ""
    domains: list[str] = Field(default_factory=list)
    created_at: str = ""


class SSLConfigs(Resource):
    tls_version: str = ""
    https_redirect: TolerantBool = False
    hsts_enabled: TolerantBool = False
    hsts_max_age: int = 0
    hsts_include_subdomains: TolerantBool = False
    hsts_preload: TolerantBool = False
    backend_protocol: str = ""
    h3_enabled: TolerantBool = False
    csp_override: TolerantBool = False


class SSLInfo(Resource):
    has_ssl: TolerantBool = False
    issuer: str = ""
    valid_from: str = ""
    valid_to: str = ""
    domains: list[str] = Field(default_factory=list)
    fingerprint: str = ""


class CustomCertificateRequest(RequestBody):
    certificate: str
    private_key: str
    chain: str | None = None


class CertificateAttachRequest(RequestBody):
    certificate_id: int | None = None
    record_ids: list[int]


class TLSVersionRequest(RequestBody):
    min_version: str


class HSTSRequest(RequestBody):
    enabled: bool
    max_age: int
    include_subdomains: bool
    preload: bool


class BackendProtocolRequest(RequestBody):
    protocol: str


# =============================================================================
# Cache & acceleration
# =============================================================================


class CacheSettings(Resource):
    cache_mode: str = ""
    cache_ttl: int = 0
    developer_mode: TolerantBool = False
    always_online: TolerantBool = False
    cache_cookies: TolerantBool = False
    browser_cache_mode: str = ""
    browser_cache_ttl: int = 0
    errors_cache_ttl: int = 0
    minify_html: TolerantBool = False
    minify_css: TolerantBool = False
    minify_js: TolerantBool = False
    image_optimization: TolerantBool = False


class PurgeRequest(RequestBody):
    domain_id: int
    purge_all: bool | None = None
    urls: list[str] | None = None


class MinifyRequest(RequestBody):
    html: bool
    css: bool
    js: bool


class WebPRequest(RequestBody):
    webp: bool


# =============================================================================
# WAF
# =============================================================================


class WAFStatus(Resource):
    enabled: TolerantBool = False
    mode: str = ""


class WAFRule(Resource):
    id: str = ""
    name: str = ""
    description: str = ""
    enabled: TolerantBool = False


class WAFLayer(Resource):
    id: str = ""
    name: str = ""
    enabled: TolerantBool = False


class WAFUpdateRequest(RequestBody):
    enabled: bool
    mode: str | None = None


class WAFRuleToggleRequest(EnabledRequest):
    rule_id: str


class WAFGroupToggleRequest(EnabledRequest):
    group_id: str


# =============================================================================
# Access rules (IP / country firewall)
# =============================================================================


class AccessRule(Resource):
    id: int = 0
    type: str = ""
    value: str = ""
    action: str = ""


class AccessRules(Resource):
    ip_rules: list[AccessRule] = Field(default_factory=list)
    country_rules: list[AccessRule] = Field(default_factory=list)


class AccessRuleRequest(RequestBody):
    """One IP or country rule change. action "remove" deletes the rule."""

    type: str | None = None
    ip: str | None = None
    country: str | None = None
    action: str


# =============================================================================
# Load-balancer clusters
# =============================================================================


class ClusterServer(Resource):
    id: int = 0
    pool_id: int = 0
    address: str = ""
    weight: int = 0
    host_header: str = ""
    port: int = 0
    priority: int = 0
    protocol: str = ""

    @property
    def is_backup(self) -> bool:
        return self.priority == -1


class ClusterPool(Resource):
    id: int = 0
    domain_id: int = 0
    name: str = ""
    port: int = 0
    description: str = ""
    method: str = ""
    hash_key: str = ""
    error_reporting: TolerantBool = False
    monitoring_protocol: str = ""
    monitoring_port: int = 0
    monitoring_method: str = ""
    monitoring_error_reporting: TolerantBool = False
    servers: list[ClusterServer] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @property
    def monitoring(self) -> str:
        if not self.monitoring_protocol:
            return "off"
        protocol = self.monitoring_protocol.lower()
        if self.monitoring_port > 0:
            return f"{protocol}:{self.monitoring_port}"
        return protocol


class ClusterAssignment(Resource):
    cluster_id: int = 0
    cluster_name: str = ""
    path_id: int = 0
    path: str = ""


class ClusterRequest(RequestBody):
    name: str
    port: int
    method: str
    description: str
    error_reporting: bool
    hash_key: str | None = None


class ClusterServerRequest(RequestBody):
    address: str
    port: int
    weight: int
    priority: int
    protocol: str
    host_header: str | None = None


class ClusterAssignRequest(RequestBody):
    path_id: int


# =============================================================================
# DDoS protection
# =============================================================================


class DDoSSettings(Resource):
    mode: str = ""
    captcha_module: str = ""
    cookie_ttl: int = 0
    js_ttl: int = 0
    captcha_ttl: int = 0
    under_attack: TolerantBool = False
    js_challenge: TolerantBool = False
    captcha_challenge: TolerantBool = False


class CaptchaModuleRequest(RequestBody):
    module: str


# =============================================================================
# Rate limiting
# =============================================================================


class RateLimitSettings(Resource):
    domain_id: int = 0
    enabled: TolerantBool = False
    limit: int = 0
    block: int = 0
    allow_methods: list[str] = Field(default_factory=list)
    whitelist: list[str] = Field(default_factory=list)
    allow_countries: list[str] = Field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""


class RateLimitRequest(RequestBody):
    """
    Rate limit configuration.

    `mode` is the on/off switch. The whitelists are omitted when None.
    """

    mode: bool
    request_count: int
    block_time: int
    methods: list[str] | None = None
    ips: list[str] | None = None
    countries: list[str] | None = None


# =============================================================================
# Custom error pages
# =============================================================================

CUSTOM_PAGE_CODES = (403, 404, 500, 502, 503, 504)


class CustomPages(Resource):
    error_403: str = ""
    error_404: str = ""
    error_500: str = ""
    error_502: str = ""
    error_503: str = ""
    error_504: str = ""


class CustomPageRequest(RequestBody):
    error_code: int
    content: str


# =============================================================================
# Page rules
# =============================================================================


class PageRulePath(Resource):
    id: int = 0
    path: str = ""
    priority: int = 0


class PageRule(Resource):
    id: int = 0
    path_id: int = 0
    type: str = ""
    settings: Any = None


class PathCreateRequest(RequestBody):
    path: str
    priority: int


class PageRuleRequest(RequestBody):
    type: str
    settings: dict[str, Any]


# =============================================================================
# Log forwarders
# =============================================================================


class LogForwarder(Resource):
    id: int = 0
    name: str = ""
    type: str = ""
    endpoint: str = ""
    enabled: TolerantBool = False
    created_at: str = ""


class LogForwarderCreateRequest(RequestBody):
    name: str
    type: str
    endpoint: str
    enabled: bool
    config: dict[str, Any] | None = None


class LogForwarderUpdateRequest(RequestBody):
    name: str | None = None
    endpoint: str | None = None
    enabled: bool


# =============================================================================
# Plans
# =============================================================================


class CDNPlan(Resource):
    id: int = 0
    name: str = ""
    display_name: str = ""
    traffic: int = 0
    price: int = 0
    features: list[str] = Field(default_factory=list)

    @property
    def price_label(self) -> str:
        return f"{self.price} Toman" if self.price else "Free"
