"""
Pass Contract ABIs
==================

Minimal ABIs of the PrivacyX pass contracts.
"""

# PXP-101
BALANCE_PASS_ABI = [
    # View functions
    {"inputs": [], "name": "currentRoot", "outputs": [{"name": "", "type": "uint256"}], "stateMutability": "view", "type": "function"},
    {"inputs": [], "name": "requiredThreshold", "outputs": [{"name": "", "type": "uint256"}], "stateMutability": "view", "type": "function"},
    {"inputs": [{"name": "", "type": "bytes32"}], "name": "nullifiers", "outputs": [{"name": "", "type": "bool"}], "stateMutability": "view", "type": "function"},

    # ZK proof entrypoint
    {
        "inputs": [
            {"name": "_pA", "type": "uint256[2]"},
            {"name": "_pB", "type": "uint256[2][2]"},
            {"name": "_pC", "type": "uint256[2]"},
            {"name": "_pubSignals", "type": "uint256[2]"},
        ],
        "name": "proveAndConsume",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },

    # Events
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "caller", "type": "address"},
            {"indexed": False, "name": "nullifier", "type": "bytes32"},
            {"indexed": False, "name": "root", "type": "uint256"},
        ],
        "name": "AccessGranted",
        "type": "event",
    },
]

# PXP-102
IDENTITY_PASS_ABI = [
    # View functions
    {"inputs": [{"name": "issuer", "type": "bytes32"}], "name": "getCurrentRoot", "outputs": [{"name": "", "type": "uint256"}], "stateMutability": "view", "type": "function"},
    {"inputs": [{"name": "nullifierHash", "type": "bytes32"}], "name": "isNullifierUsed", "outputs": [{"name": "", "type": "bool"}], "stateMutability": "view", "type": "function"},

    # ZK proof entrypoint
    {
        "inputs": [
            {"name": "_pA", "type": "uint256[2]"},
            {"name": "_pB", "type": "uint256[2][2]"},
            {"name": "_pC", "type": "uint256[2]"},
            {"name": "_pubSignals", "type": "uint256[3]"},
        ],
        "name": "proveIdentity",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },

    # Events
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "name": "caller", "type": "address"},
            {"indexed": True, "name": "nullifier", "type": "bytes32"},
            {"indexed": True, "name": "issuer", "type": "bytes32"},
            {"indexed": False, "name": "root", "type": "uint256"},
        ],
        "name": "IdentityPassUsed",
        "type": "event",
    },
]

# PXP-103 has no deployed contract yet
REPUTATION_PASS_ABI: list[dict] = []
