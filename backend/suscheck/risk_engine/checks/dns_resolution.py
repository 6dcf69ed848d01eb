import ipaddress

from suscheck.domain_utils import is_ipv4
from suscheck.risk_engine.checks.base import BaseRiskCheck
from suscheck.risk_engine.errors import ProbeError, ProbeTimeout

PRIVATE_NETWORKS = (
    ipaddress.ip_network('10.0.0.0/8'),
    ipaddress.ip_network('172.16.0.0/12'),
    ipaddress.ip_network('192.168.0.0/16'),
)


def is_private_address(address: str) -> bool:
    try:
        value = ipaddress.ip_address(address)
    except ValueError:
        return False
    return any(value in network for network in PRIVATE_NETWORKS)


class DnsResolutionCheck(BaseRiskCheck):
    name = 'DNS Resolution'
    requires_network = True
    timeout = 3.0

    def run(self, url, domain, context):
        if is_ipv4(domain):
            addresses = [domain]
        else:
            try:
                addresses = context.external.resolve_ipv4(domain)
            except ProbeTimeout:
                return self.warn('DNS lookup timed out', 15)
            except ProbeError:
                return self.warn('Could not resolve DNS', 10)

        if not addresses:
            return self.fail('Domain does not resolve', 40)

        private = [address for address in addresses if is_private_address(address)]
        if private:
            return self.fail(f'Resolves to private IP ({private[0]})', 35)

        count = len(addresses)
        return self.passed(f'Resolves to {count} address' + ('' if count == 1 else 'es'))
