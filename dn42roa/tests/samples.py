SAMPLE_ROUTE = """route:              172.20.0.0/24
descr:              Example network
origin:             AS4242420625
mnt-by:             EXAMPLE-MNT
source:             DN42
"""

SAMPLE_ROUTE6 = """route6:             fd42:4242:625::/48
descr:              Example network
origin:             AS4242420625
mnt-by:             EXAMPLE-MNT
source:             DN42
"""

SAMPLE_FILTER = """# Nr  Action  Prefix              MinLen  MaxLen  Comment
1     permit  172.20.0.0/14       21      29      # dn42
2     permit  10.0.0.0/8          15      24      # freifunk
99    deny    0.0.0.0/0           0       32      # default deny
"""

SAMPLE_FILTER6 = """# Nr  Action  Prefix              MinLen  MaxLen  Comment
1     permit  fd00::/8            44      64      # ULA
99    deny    ::/0                0       128     # default deny
"""

