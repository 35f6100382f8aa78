# plexaubnet

Small helpers for IP address management (IPAM) work, and for preparing the
binaries that controller integration tests run against.

## Installation

```
pip install plexaubnet
```

Install the test extra to run the test suite:

```
pip install "plexaubnet[test]"
```

## CIDR helpers

`plexaubnet.netutil` answers two questions about networks.

```python
import ipaddress
from plexaubnet.netutil import cidr_overlaps, calculate_last_ip

cidr_overlaps("10.0.0.0/23", "10.0.1.0/24")          # True
cidr_overlaps("10.0.0.0/24", "10.0.1.0/24")          # False
cidr_overlaps("2001:db8::/63", "2001:db8:0:1::/64")  # True

calculate_last_ip(ipaddress.ip_network("192.168.1.0/24"))  # IPv4Address('192.168.1.255')
calculate_last_ip("2001:db8::/112")                        # IPv6Address('2001:db8::ffff')
```

`cidr_overlaps(cidr1, cidr2)` never raises. It returns `False` when either
value is not a valid `address/prefix` string, and when the two networks belong
to different address families. Host bits in the address are allowed
(`10.0.0.5/24` is read as `10.0.0.0/24`). An IPv4-mapped IPv6 range such as
`::ffff:10.0.0.0/120` is treated as a family of its own: it overlaps neither
the IPv4 range `10.0.0.0/24` nor ordinary IPv6 ranges.

`calculate_last_ip(network)` takes an `ipaddress` network object or a CIDR
string and returns the last address in the range, with every host bit set.
For an IPv4-mapped IPv6 network the result is the plain IPv4 address. A string
that is not valid CIDR raises `ValueError`.

## Envtest assets

`plexaubnet.envtest_setup` makes sure the control-plane binaries used by
integration tests are available and points `KUBEBUILDER_ASSETS` at them.

```python
from plexaubnet.envtest_setup import ensure_envtest_assets, get_k8s_version

get_k8s_version()          # "1.32.0" unless ENVTEST_K8S_VERSION is set
path = ensure_envtest_assets()
```

`ensure_envtest_assets(assets_dir=None)` returns the assets directory:

- If `KUBEBUILDER_ASSETS` is already set, its value is returned unchanged.
- Otherwise the assets directory is created if needed. It defaults to
  `BINARY_ASSETS_DIR`, `.cache/kubebuilder-envtest` under the system temporary
  directory.
- If that directory already holds an `etcd` binary (`etcd.exe` on Windows),
  `KUBEBUILDER_ASSETS` is set to it.
- Otherwise `go run sigs.k8s.io/controller-runtime/tools/setup-envtest@latest`
  is run for the chosen Kubernetes version, and if that fails, once more for
  already-installed versions. The path the tool prints is passed to
  `validate_and_set_env_path`, which checks it holds an `etcd` binary and then
  sets `KUBEBUILDER_ASSETS`. The download needs the `go` toolchain on `PATH`.

`get_k8s_version()` reads `ENVTEST_K8S_VERSION`; a value such as `1.32` (or a
bare `1`) gains a `.0` suffix, and a three-part version is used as it is.

`etcd_binary_path(directory)` returns where the `etcd` binary is expected in a
directory.

Any failure to create the directory, download the binaries or find `etcd`
raises `EnvtestSetupError`.

## Scope

This is a library only. It has no command-line tool, and it does not allocate
subnets, track pools or talk to a cluster; it provides the CIDR checks such
logic is built on and the test-environment setup described above.