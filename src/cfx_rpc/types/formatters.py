"""
Response formatters for structured node results.

Every formatter takes the raw JSON object returned by the node and returns a
dict with the same camelCase keys, quantities converted to ``int`` and
ratios to ``Decimal``. Keys the formatter does not know about are kept
verbatim.
"""

from __future__ import annotations

from typing import Any

from cfx_rpc import format
from cfx_rpc.format import Formatter, array_of, dict_of

uint = format.big_uint


def _tx_or_hash(value: Any) -> Any:
    if isinstance(value, dict):
        return transaction(value)
    return format.hex64(value)


status = dict_of(
    {
        "chainId": uint,
        "networkId": uint,
        "ethereumSpaceChainId": uint,
        "epochNumber": uint,
        "blockNumber": uint,
        "pendingTxNumber": uint,
        "latestCheckpoint": uint,
        "latestConfirmed": uint,
        "latestState": uint,
        "latestFinalized": uint,
    },
    "status",
)

transaction = dict_of(
    {
        "nonce": uint,
        "gasPrice": uint,
        "gas": uint,
        "value": uint,
        "storageLimit": uint,
        "epochHeight": uint,
        "chainId": uint,
        "v": uint,
        "yParity": uint,
        "status": uint,
        "transactionIndex": uint,
        "type": uint,
        "maxFeePerGas": uint,
        "maxPriorityFeePerGas": uint,
    },
    "transaction",
)

block = dict_of(
    {
        "epochNumber": uint,
        "blockNumber": uint,
        "gasLimit": uint,
        "gasUsed": uint,
        "height": uint,
        "size": uint,
        "timestamp": uint,
        "difficulty": uint,
        "powQuality": uint,
        "baseFeePerGas": uint,
        "adaptive": format.boolean,
        "transactions": array_of(_tx_or_hash, "transactions"),
    },
    "block",
)

log = dict_of(
    {
        "epochNumber": uint,
        "logIndex": uint,
        "transactionIndex": uint,
        "transactionLogIndex": uint,
    },
    "log",
)

logs = array_of(log, "logs")

receipt = dict_of(
    {
        "index": uint,
        "epochNumber": uint,
        "outcomeStatus": uint,
        "gasUsed": uint,
        "gasFee": uint,
        "storageCollateralized": uint,
        "burntGasFee": uint,
        "effectiveGasPrice": uint,
        "type": uint,
        "storageReleased": array_of(dict_of({"collaterals": uint}, "storage_released")),
        "logs": logs,
    },
    "receipt",
)

estimate = dict_of(
    {
        "gasUsed": uint,
        "gasLimit": uint,
        "storageCollateralized": uint,
    },
    "estimate",
)

supply_info = dict_of(
    {
        "totalIssued": uint,
        "totalCollateral": uint,
        "totalStaking": uint,
        "totalCirculating": uint,
        "totalEspaceTokens": uint,
    },
    "supply_info",
)

fee_history = dict_of(
    {
        "oldestEpoch": uint,
        "baseFeePerGas": array_of(uint),
        "reward": array_of(array_of(uint)),
    },
    "fee_history",
)

account = dict_of(
    {
        "accumulatedInterestReturn": uint,
        "balance": uint,
        "collateralForStorage": uint,
        "nonce": uint,
        "stakingBalance": uint,
    },
    "account",
)

sponsor_info = dict_of(
    {
        "sponsorBalanceForCollateral": uint,
        "sponsorBalanceForGas": uint,
        "sponsorGasBound": uint,
        "usedStoragePoints": uint,
        "availableStoragePoints": uint,
    },
    "sponsor_info",
)

vote_list = array_of(
    dict_of({"amount": uint, "unlockBlockNumber": uint}, "vote"),
    "vote_list",
)

deposit_list = array_of(
    dict_of(
        {"amount": uint, "accumulatedInterestRate": uint, "depositTime": uint},
        "deposit",
    ),
    "deposit_list",
)

reward_info = array_of(
    dict_of({"baseReward": uint, "totalReward": uint, "txFee": uint}, "reward"),
    "reward_info",
)

account_pending_info = dict_of(
    {"localNonce": uint, "pendingCount": uint, "pendingNonce": uint},
    "account_pending_info",
)

account_pending_transactions = dict_of(
    {
        "pendingCount": uint,
        "pendingTransactions": array_of(transaction),
    },
    "account_pending_transactions",
)

pos_economics = dict_of(
    {
        "distributablePosInterest": uint,
        "lastDistributeBlock": uint,
        "totalPosStakingTokens": uint,
    },
    "pos_economics",
)

vote_params_info = dict_of(
    {
        "powBaseReward": uint,
        "interestRate": uint,
        "storagePointProp": uint,
        "baseFeeShareProp": uint,
    },
    "vote_params_info",
)

collateral_info = dict_of(
    {
        "totalStorageTokens": uint,
        "convertedStoragePoints": uint,
        "usedStoragePoints": uint,
    },
    "collateral_info",
)

epoch_receipts = array_of(array_of(receipt), "epoch_receipts")

transactions = array_of(transaction, "transactions")

filter_changes = Formatter(
    lambda value: logs(value) if value and isinstance(value[0], dict) else array_of(format.hex64)(value),
    "filter_changes",
)
