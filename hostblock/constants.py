"""Constants and default values for hostblock."""

import socket

# Output
DEFAULT_OUTPUT = "/etc/hosts"
DEFAULT_REDIRECT_IP = "0.0.0.0"
BACKUP_SUFFIX = ".bak"

DEFAULT_HEADER = f"""127.0.0.1       localhost {socket.gethostname()}
255.255.255.255 broadcasthost
::1             localhost ip6-localhost ip6-loopback
fe00::0         ip6-localnet
ff00::0         ip6-mcastprefix
ff02::1         ip6-allnodes
ff02::2         ip6-allrouters
ff02::3         ip6-allhosts"""

DEFAULT_SOURCES = (
    "https://raw.githubusercontent.com/zant95/hosts/master/hosts",
    "https://adaway.org/hosts.txt",
    "https://hosts-file.net/ad_servers.txt",
    "https://pgl.yoyo.org/adservers/serverlist.php?hostformat=hosts&showintro=0&mimetype=plaintext",
    "https://raw.githubusercontent.com/StevenBlack/hosts/master/data/StevenBlack/hosts",
    "https://someonewhocares.org/hosts/zero/hosts",
    "https://winhelp2002.mvps.org/hosts.txt",
    "https://mirror1.malwaredomains.com/files/justdomains",
    "https://raw.githubusercontent.com/mitchellkrogza/Badd-Boyz-Hosts/master/hosts",
    "https://ransomwaretracker.abuse.ch/downloads/RW_DOMBL.txt",
    "https://zeustracker.abuse.ch/blocklist.php?download=domainblocklist",
    "https://raw.githubusercontent.com/hoshsadiq/adblock-nocoin-list/master/hosts.txt",
    "https://raw.githubusercontent.com/CHEF-KOCH/NSABlocklist/master/HOSTS",
    "https://raw.githubusercontent.com/FadeMind/hosts.extras/master/add.Spam/hosts",
)

# POSIX basic regular expressions
DEFAULT_WHITELIST = (
    r"^localhost$",
    r"\.in-addr\.arpa$",
)

DEFAULT_BLACKLIST = ("www.googleadservices.com",)

# Fetching
DEFAULT_TIMEOUT = 30  # HTTP timeout in seconds
# Some list hosts reject the default urllib agent
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64; rv:128.0) Gecko/20100101 Firefox/128.0"
)

# Configuration file
CONFIG_SECTION = "hostblock"

# Elevated write helper (content is piped to `tee <path>`)
ELEVATED_WRITE_COMMAND = ("sudo", "tee")

# Line grammar
# - Labels: 1-63 of alnum/underscore/hyphen, at least one dot
# - Top label starts with a letter, 2-63 chars total
DOMAIN_PATTERN = r"(?:[A-Za-z0-9_-]{1,63}\.)+[A-Za-z][A-Za-z0-9_-]{1,62}"
STRICT_IP_PATTERN = r"(?:0\.0\.0\.0|127\.0\.0\.1)"
LENIENT_IP_PATTERN = r"(?:[0-9]{1,3}\.){3}[0-9]{1,3}"

COMMENT_CHAR = "#"
LOCAL_SUFFIXES = (".localdomain", ".local")
