from dataclasses import dataclass, field
from typing import Dict

@dataclass
class HTTPOptions:
    timeout: int = 10000
    headers: Dict[str, str] = field(default_factory=lambda: {
        "User-Agent": "customerio-request/1.0 (+https://customer.io)"
    })
    trust_env: bool = True
