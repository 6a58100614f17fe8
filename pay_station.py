from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Tuple, Union
from dataclasses import dataclass
from threading import Lock
import logging


logger = logging.getLogger(__name__)


# ==================== Enums ====================

class Coin(Enum):
    """Coin denominations accepted by a standard pay station"""
    NICKEL = 5
    DIME = 10
    QUARTER = 25


# ==================== Errors ====================

class InvalidCoinError(ValueError):
    """Raised when a coin outside the accepted denominations is inserted"""

    def __init__(self, coin_value):
        super().__init__(f"Invalid coin: {coin_value}")
        self.coin_value = coin_value


# ==================== Core Models ====================

@dataclass(frozen=True)
class RateConfig:
    """Accepted coins and the rate at which money buys parking time"""
    valid_coins: Tuple[int, ...] = tuple(coin.value for coin in Coin)
    units_per_block: int = 5
    minutes_per_block: int = 2

    def __post_init__(self):
        if not self.valid_coins:
            raise ValueError("At least one valid coin is required")
        if any(value <= 0 for value in self.valid_coins):
            raise ValueError(f"Coin values must be positive: {self.valid_coins}")
        if self.units_per_block <= 0 or self.minutes_per_block <= 0:
            raise ValueError("Rate block sizes must be positive")

    def minutes_for(self, amount: int) -> int:
        """Parking minutes bought by amount; partial blocks buy nothing"""
        return amount // self.units_per_block * self.minutes_per_block


@dataclass(frozen=True)
class Receipt:
    """Proof of purchase stating the parking time bought"""
    value: int

    def get_value(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"Receipt({self.value} min)"


# ==================== Pay Station Interface ====================

class PayStation(ABC):
    """Business interface of a coin-operated parking pay station"""

    @abstractmethod
    def add_payment(self, coin_value: Union[int, Coin]) -> None:
        """Insert a coin; raises InvalidCoinError for unknown denominations"""
        pass

    @abstractmethod
    def read_display(self) -> int:
        """Minutes of parking bought in the current transaction"""
        pass

    @abstractmethod
    def buy(self) -> Receipt:
        """Commit the transaction and issue a receipt"""
        pass

    @abstractmethod
    def cancel(self) -> Dict[int, int]:
        """Abort the transaction, returning the inserted coins by denomination"""
        pass

    @abstractmethod
    def empty(self) -> int:
        """Collect the earnings accumulated since the last empty"""
        pass


# ==================== Pay Station ====================

class PayStationImpl(PayStation):
    """
    Pay station holding one in-progress transaction and the lifetime earnings.

    All operations run under a single lock so the display, the inserted
    amount and the coin log always agree with each other.
    """

    def __init__(self, config: Optional[RateConfig] = None):
        self._config = config or RateConfig()
        self._lock = Lock()
        self._total_earnings = 0

        # Transaction state
        self._inserted_so_far = 0
        self._time_bought = 0
        # Only handed out through cancel()
        self._coin_log: Dict[int, int] = {}

    def get_config(self) -> RateConfig:
        return self._config

    def add_payment(self, coin_value: Union[int, Coin]) -> None:
        if isinstance(coin_value, Coin):
            coin_value = coin_value.value

        if not self._is_valid_coin(coin_value):
            logger.warning("Rejected coin: %r", coin_value)
            raise InvalidCoinError(coin_value)

        with self._lock:
            self._coin_log[coin_value] = self._coin_log.get(coin_value, 0) + 1
            self._inserted_so_far += coin_value
            self._time_bought = self._config.minutes_for(self._inserted_so_far)
            logger.debug("Accepted coin %d: inserted %d, display %d min",
                         coin_value, self._inserted_so_far, self._time_bought)

    def read_display(self) -> int:
        with self._lock:
            return self._time_bought

    def buy(self) -> Receipt:
        with self._lock:
            receipt = Receipt(self._time_bought)
            self._total_earnings += self._inserted_so_far
            logger.info("Purchase: %d min for %d", receipt.value, self._inserted_so_far)
            self._reset_transaction()
            return receipt

    def cancel(self) -> Dict[int, int]:
        with self._lock:
            coins = self._coin_log
            logger.info("Transaction cancelled, returning coins %s", coins)
            self._reset_transaction()
            return coins

    def empty(self) -> int:
        with self._lock:
            earnings = self._total_earnings
            self._total_earnings = 0
            logger.info("Emptied earnings: %d", earnings)
            return earnings

    def _is_valid_coin(self, coin_value) -> bool:
        """Check the value against the accepted denominations"""
        if isinstance(coin_value, bool) or not isinstance(coin_value, int):
            return False
        return coin_value in self._config.valid_coins

    def _reset_transaction(self) -> None:
        """Start a fresh transaction; caller must hold the lock"""
        self._inserted_so_far = 0
        self._time_bought = 0
        # New dict so a log already returned by cancel() stays untouched
        self._coin_log = {}

    def __repr__(self) -> str:
        return f"PayStation(display={self._time_bought} min, inserted={self._inserted_so_far})"


# ==================== Demo Usage ====================

def main():
    """Demo the pay station"""
    print("=== Pay Station Demo ===\n")

    station = PayStationImpl()

    # Test Case 1: Buy parking time
    print("=" * 80)
    print("TEST CASE 1: Buy Parking Time")
    print("=" * 80)
    print("Driver inserts five nickels\n")

    for _ in range(5):
        station.add_payment(Coin.NICKEL)
    print(f"[PayStation] Display: {station.read_display()} min")

    receipt = station.buy()
    print(f"[PayStation] Issued {receipt}")

    # Test Case 2: Cancel and refund
    print("\n" + "=" * 80)
    print("TEST CASE 2: Cancelled Transaction")
    print("=" * 80)
    print("Driver inserts two quarters and a dime, then changes mind\n")

    station.add_payment(25)
    station.add_payment(25)
    station.add_payment(10)
    print(f"[PayStation] Display: {station.read_display()} min")

    refund = station.cancel()
    for denomination, count in sorted(refund.items()):
        print(f"  Refund {denomination} x {count}")
    print(f"[PayStation] Display: {station.read_display()} min")

    # Test Case 3: Invalid coin
    print("\n" + "=" * 80)
    print("TEST CASE 3: Invalid Coin")
    print("=" * 80)
    print("Driver inserts a penny\n")

    try:
        station.add_payment(1)
    except InvalidCoinError as e:
        print(f"[PayStation] Coin returned: {e}")
    print(f"[PayStation] Display: {station.read_display()} min")

    # Test Case 4: Operator collects earnings
    print("\n" + "=" * 80)
    print("TEST CASE 4: Empty Earnings")
    print("=" * 80)

    print(f"[Operator] Collected: {station.empty()}")
    print(f"[Operator] Collected again: {station.empty()}")

    print("\n=== Demo Complete ===")


if __name__ == "__main__":
    main()
