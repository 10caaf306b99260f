"""Static start script fragments.

Fragments use ``@{name}`` placeholders so that shell ``$VAR`` syntax stays
literal. ``@@`` yields a literal ``@``.
"""

from __future__ import annotations

from string import Template

from kvstart.exceptions import TemplateError

# Feature flag that turns on the DNS name / pod IP match wait
FEATURE_WAIT_FOR_DNS_NAME_IP_MATCH = "WaitForDnsNameIpMatch"

TIKV_CONFIG_PATH = "/etc/tikv/tikv.toml"
TIKV_BINARY = "/tikv-server"


class ScriptFragment(Template):
    """A named block of shell text with ``@{name}`` placeholders."""

    delimiter = "@"

    def __init__(self, name: str, template: str):
        super().__init__(template)
        self.name = name

    def render(self, **values: object) -> str:
        """Substitute values into the fragment.

        Raises TemplateError if a placeholder is missing or malformed.
        """
        try:
            return self.substitute(values)
        except KeyError as e:
            raise TemplateError(f"fragment '{self.name}': no value for placeholder {e}")
        except ValueError as e:
            raise TemplateError(f"fragment '{self.name}': {e}")

    def __repr__(self) -> str:
        return f"ScriptFragment({self.name!r})"


POD_IDENTITY = ScriptFragment(
    "pod-identity",
    "TIKV_POD_NAME=${POD_NAME:-$HOSTNAME}",
)

# Cross-cluster members learn their PD endpoints from the discovery service.
# The loop has no retry limit: the member must not start before discovery
# has verified the PD endpoints.
ACROSS_K8S_DISCOVERY = ScriptFragment(
    "across-k8s-discovery",
    r"""pd_url=@{pd_addr}
encoded_domain_url=$(echo $pd_url | base64 | tr "\n" " " | sed "s/ //g")
discovery_url=@{discovery_addr}
until result=$(wget -qO- -T 3 http://${discovery_url}/verify/${encoded_domain_url} 2>/dev/null | sed 's/http:\/\///g'); do
    echo "waiting for the verification of PD endpoints ..."
    sleep $((RANDOM % 5))
done""",
)

DNS_AWAIT_IP_MATCH = ScriptFragment(
    "dns-await-ip-match",
    r"""componentDomain=@{advertise_host}
waitThreshold=@{start_timeout}

elapseTime=0
period=1
while true; do
    sleep ${period}
    elapseTime=$(( elapseTime+period ))

    if [ ${elapseTime} -ge ${waitThreshold} ]; then
        echo "waiting for cluster ready timeout" >&2
        exit 1
    fi

    lookupRes=$(getent ahosts "${componentDomain}")
    if [ $? -ne 0 ]; then
        echo "domain resolve ${componentDomain} failed"
        continue
    fi
    digRes=$(echo "${lookupRes}" | sed -n 's/ *STREAM.*//p')

    if [ -z "${digRes}" ]; then
        echo "domain resolve ${componentDomain} no record return"
        continue
    fi

    localIps=" $(hostname -i 2>/dev/null) "
    matchedIp=""
    for ip in ${digRes}; do
        case "${localIps}" in
            *" ${ip} "*) matchedIp="${ip}" ;;
        esac
    done
    if [ -n "${matchedIp}" ]; then
        echo "domain resolve ${componentDomain} matches local ip ${matchedIp}"
        break
    fi
    echo "domain resolve ${componentDomain} returns ${digRes}, waiting for local ip"
done""",
)

# Empty so that members without the feature flag keep their old behavior
DNS_AWAIT_NONE = ScriptFragment("dns-await-none", "")

DEBUG_RUNMODE = ScriptFragment(
    "debug-runmode",
    r"""ANNOTATIONS="/etc/podinfo/annotations"
runmode=""
if [ -f "${ANNOTATIONS}" ]; then
    runmode=$(sed -n 's/^runmode="\(.*\)"$/\1/p' "${ANNOTATIONS}")
fi
if [ "X${runmode}" = "Xdebug" ]; then
    echo "entering debug mode."
    tail -f /dev/null
fi""",
)

# Shared by every component start script
SHARED_FRAGMENTS = (DEBUG_RUNMODE,)

BASE_ARGS = ScriptFragment(
    "base-args",
    f"""ARGS="--pd=@{{pd_addr}} \\
--advertise-addr=@{{advertise_addr}} \\
--addr=@{{addr}} \\
--status-addr=@{{status_addr}} \\
--data-dir=@{{data_dir}} \\
--capacity=@{{capacity}} \\
--config={TIKV_CONFIG_PATH}\"""",
)

EXTRA_ARGS = ScriptFragment(
    "extra-args",
    'ARGS="${ARGS} @{extra_args}"',
)

# STORE_LABELS is checked by the generated script, not at render time
STORE_LABELS = ScriptFragment(
    "store-labels",
    """if [ ! -z "${STORE_LABELS:-}" ]; then
  LABELS="--labels ${STORE_LABELS}"
  ARGS="${ARGS} ${LABELS}"
fi""",
)

EXEC_SERVER = ScriptFragment(
    "exec-server",
    f"""echo "starting tikv-server ..."
echo "{TIKV_BINARY} ${{ARGS}}"
exec {TIKV_BINARY} ${{ARGS}}""",
)
