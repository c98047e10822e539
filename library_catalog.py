#!/usr/bin/env python3
"""
library_catalog.py

In-memory catalog for a small library. Books, audiobooks and e-magazines can be
searched, borrowed, bought and returned; borrowing posts a per-day fine, late
returns post a flat overdue penalty, and simple reports summarise fines,
purchases and the most borrowed item.

Nothing is persisted: all state lives in one `Catalog` for the duration of an
interactive session. Days do not follow the wall clock, they advance only when
the session asks for it (`Catalog.advance_one_day`).

Typical usage:
    python library_catalog.py --rate 10 --penalty 30
"""

from __future__ import annotations
import argparse
import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd

# Configuration
DEFAULT_FINE_RATE = 10  # currency units per borrowed day
OVERDUE_PENALTY = 30
ID_BASE = 1000
CURRENCY = "Rs."

# Logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger("LibraryCatalog")


class InvalidArgument(ValueError):
    """
    Raised for input the catalog cannot interpret at all, such as a negative day
    count or an item id that does not exist.

    Refused business actions (borrowing an item that is out, returning one that
    is on the shelf) are not errors; they come back as `(False, message)`.
    """


def _require_count(value, what: str) -> int:
    # bool is an int subclass, but True days is never meant
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(f"{what} must be a whole number, got {value!r}")
    if value < 0:
        raise InvalidArgument(f"{what} cannot be negative: {value}")
    return value


# ---------------- Fine policy ----------------
class FinePolicy:
    """
    Linear fine policy: `rate` currency units for every borrowed day.

    Callers only ever use `calculate(days)`, so any object with that method can
    replace this one (different rate or a different formula entirely).
    """

    def __init__(self, rate: int = DEFAULT_FINE_RATE):
        self.rate = int(rate)

    def calculate(self, days: int) -> int:
        return self.rate * days

    def __repr__(self) -> str:
        return f"FinePolicy(rate={self.rate})"


# ---------------- Item variants ----------------
class ItemKind(Enum):
    BOOK = "Book"
    AUDIOBOOK = "AudioBook"
    EMAGAZINE = "EMagazine"


class Capability(Enum):
    NONE = "none"
    PLAYABLE = "playable"
    ARCHIVABLE = "archivable"


@dataclass(frozen=True)
class BookDetails:
    pages: int

    kind = ItemKind.BOOK
    capability = Capability.NONE

    def summary(self) -> str:
        return f"{self.pages}p"


@dataclass(frozen=True)
class AudioBookDetails:
    hours: float

    kind = ItemKind.AUDIOBOOK
    capability = Capability.PLAYABLE

    def summary(self) -> str:
        return f"{self.hours}hrs"


@dataclass(frozen=True)
class EMagazineDetails:
    issue: int

    kind = ItemKind.EMAGAZINE
    capability = Capability.ARCHIVABLE

    def summary(self) -> str:
        return f"Issue {self.issue}"


ItemDetails = Union[BookDetails, AudioBookDetails, EMagazineDetails]


class IdAllocator:
    """Hands out item ids in increasing order starting at `base`; ids are never reused."""

    def __init__(self, base: int = ID_BASE):
        self._next = int(base)

    def allocate(self) -> int:
        item_id = self._next
        self._next += 1
        return item_id


# ---------------- Library item ----------------
@dataclass
class LibraryItem:
    """
    One catalog entry and its circulation state.

    `remaining_days` only means something while the item is out; it counts down
    once per simulated day and goes negative when the item is overdue. A sold
    item shares the checked-out flag and counter but can never come back.
    """

    item_id: int
    title: str
    author: str
    details: ItemDetails
    available: bool = True
    remaining_days: int = 0
    borrow_count: int = 0
    sold: bool = False

    @property
    def kind(self) -> ItemKind:
        return self.details.kind

    @property
    def capability(self) -> Capability:
        return self.details.capability

    @property
    def is_overdue(self) -> bool:
        return not self.available and self.remaining_days < 0

    def not_available_msg(self) -> str:
        return f"\"{self.title}\" not available now. Will be back soon!"

    def borrow(self, days: int, policy: FinePolicy, fines: FineManager) -> Tuple[bool, str]:
        """
        Check the item out for `days` days and post the borrow fine.

        Returns (success, message). An item that is already out is left untouched
        and reported with the "not available" notice.
        """
        days = _require_count(days, "Borrow days")
        if not self.available:
            logger.debug("Borrow refused for %s: not available", self.item_id)
            return False, self.not_available_msg()

        self.available = False
        self.remaining_days = days
        self.borrow_count += 1

        fine_total = policy.calculate(days)
        fines.add_fine(self.item_id, fine_total)
        logger.info("Borrowed %s for %d day(s), fine %s", self.item_id, days, fine_total)

        lines = [
            f"\"{self.title}\" borrowed for {days} day(s). (ID={self.item_id})",
            f"Due in {days} days | Fine/day = {CURRENCY}{policy.calculate(1)}",
        ]
        return True, "\n".join(lines)

    def return_item(self, fines: FineManager, penalty: int = OVERDUE_PENALTY) -> Tuple[bool, str]:
        """
        Put the item back on the shelf, posting `penalty` first when it is overdue.

        Returns (success, message).
        """
        if self.available:
            logger.debug("Return ignored for %s: already on the shelf", self.item_id)
            return False, f"\"{self.title}\" is not checked out."
        if self.sold:
            logger.debug("Return refused for %s: item was sold", self.item_id)
            return False, f"\"{self.title}\" was sold and cannot be returned."

        lines = []
        if self.remaining_days < 0:
            fines.add_fine(self.item_id, penalty)
            logger.info("Overdue penalty %s posted for %s", penalty, self.item_id)
            lines.append(f"\"{self.title}\" is overdue! Extra fine {CURRENCY}{penalty} applied.")

        self.available = True
        self.remaining_days = 0
        logger.info("Returned %s", self.item_id)
        lines.append(f"Returned \"{self.title}\" (ID={self.item_id})")
        return True, "\n".join(lines)

    def mark_sold(self, price: int, fines: FineManager) -> Tuple[bool, str]:
        """
        Sell the item: it leaves circulation and `price` goes to the purchase total.

        Fines and the borrow count are not touched.
        """
        price = _require_count(price, "Price")
        if not self.available:
            logger.debug("Purchase refused for %s: not available", self.item_id)
            return False, self.not_available_msg()

        self.available = False
        self.sold = True
        fines.add_purchase(price)
        logger.info("Sold %s for %s", self.item_id, price)
        return True, f"Bought \"{self.title}\" (ID={self.item_id})"

    def advance_one_day(self) -> None:
        if not self.available:
            self.remaining_days -= 1

    def status_label(self) -> str:
        if self.available:
            return "Available"
        if self.remaining_days >= 0:
            return f"Borrowed ({self.remaining_days} days left)"
        return "Overdue!"

    def describe(self) -> str:
        return (f"[{self.kind.value}] \"{self.title}\" by {self.author} | ID={self.item_id} "
                f"| Status: {self.status_label()} | {self.details.summary()}")

    # extras offered by some variants
    def play_sample(self) -> Tuple[bool, str]:
        if self.capability is not Capability.PLAYABLE:
            return False, f"\"{self.title}\" has no sample to play."
        return True, f"Playing sample: {self.title}"

    def archive(self) -> Tuple[bool, str]:
        if self.capability is not Capability.ARCHIVABLE:
            return False, f"\"{self.title}\" has no issue to archive."
        return True, f"Archiving Issue #{self.details.issue} of {self.title}"


# ---------------- Fines & reports ----------------
@dataclass
class LibraryStats:
    most_borrowed_title: Optional[str]
    most_borrowed_count: Optional[int]
    total_fines: int
    total_purchases: int


class FineManager:
    """
    Accumulates fines per item id and the running purchase total.

    Both only ever grow; nothing here subtracts or validates amounts.
    """

    def __init__(self):
        self.fines: Dict[int, int] = {}
        self.total_purchases = 0

    def add_fine(self, item_id: int, amount: int) -> None:
        self.fines[item_id] = self.fines.get(item_id, 0) + amount

    def add_purchase(self, amount: int) -> None:
        self.total_purchases += amount

    def fine_for(self, item_id: int) -> int:
        return self.fines.get(item_id, 0)

    def total_fines(self) -> int:
        return sum(self.fines.values())

    def report_fines(self) -> Optional[pd.DataFrame]:
        """
        Tabulate the non-zero fines per item.

        Returns None when no fine has been recorded at all, otherwise a DataFrame
        with columns Item ID, Fine.
        """
        if not self.fines:
            return None
        df = pd.DataFrame(list(self.fines.items()), columns=["Item ID", "Fine"])
        return df.loc[df["Fine"] != 0].reset_index(drop=True)

    def report_stats(self, items: Iterable[LibraryItem]) -> LibraryStats:
        """
        Most borrowed item (first one wins a tie), total fines and total purchases.

        The most-borrowed fields are None when `items` is empty.
        """
        items = list(items)
        title, count = None, None
        if items:
            counts = pd.Series([it.borrow_count for it in items])
            top = items[int(counts.idxmax())]
            title, count = top.title, top.borrow_count
        return LibraryStats(
            most_borrowed_title=title,
            most_borrowed_count=count,
            total_fines=self.total_fines(),
            total_purchases=self.total_purchases,
        )

    def export_report_items(self, items: Iterable[LibraryItem]) -> pd.DataFrame:
        """
        Produce a DataFrame of the inventory with each item's status and fine.
        """
        rows = []
        for it in items:
            rows.append({
                "Item ID": it.item_id,
                "Type": it.kind.value,
                "Title": it.title,
                "Author": it.author,
                "Status": it.status_label(),
                "Borrow Count": it.borrow_count,
                "Fine": self.fine_for(it.item_id),
            })
        return pd.DataFrame(rows, columns=["Item ID", "Type", "Title", "Author", "Status", "Borrow Count", "Fine"])


# ---------------- Catalog ----------------
class Catalog:
    """
    The session's item collection plus the shared fine policy and fine manager.

    Mutating calls go through one lock so an item's state change and the fine or
    purchase it posts are applied together.
    """

    def __init__(self,
                 policy: Optional[FinePolicy] = None,
                 fines: Optional[FineManager] = None,
                 id_base: int = ID_BASE,
                 overdue_penalty: int = OVERDUE_PENALTY):
        self.policy = policy if policy is not None else FinePolicy()
        self.fines = fines if fines is not None else FineManager()
        self.overdue_penalty = int(overdue_penalty)
        self.items: List[LibraryItem] = []
        self._ids = IdAllocator(id_base)
        self._lock = threading.RLock()

    # ---- adding items
    def _add(self, title: str, author: str, details: ItemDetails) -> LibraryItem:
        if not title or not str(title).strip():
            raise InvalidArgument("Title cannot be empty")
        with self._lock:
            item = LibraryItem(self._ids.allocate(), title, author, details)
            self.items.append(item)
        logger.info("Added %s %s", item.kind.value, item.item_id)
        return item

    def add_book(self, title: str, author: str, pages: int) -> LibraryItem:
        return self._add(title, author, BookDetails(pages))

    def add_audiobook(self, title: str, author: str, hours: float) -> LibraryItem:
        return self._add(title, author, AudioBookDetails(hours))

    def add_emagazine(self, title: str, author: str, issue: int) -> LibraryItem:
        return self._add(title, author, EMagazineDetails(issue))

    # ---- lookups
    def list_items(self) -> List[LibraryItem]:
        return list(self.items)

    def search(self, keyword: str) -> List[LibraryItem]:
        """Case-insensitive substring match on title or author, in catalog order."""
        k = (keyword or "").lower()
        return [it for it in self.items if k in it.title.lower() or k in it.author.lower()]

    def find_item(self, item_id: int) -> Optional[LibraryItem]:
        for it in self.items:
            if it.item_id == item_id:
                return it
        return None

    def get_item(self, item_id: int) -> LibraryItem:
        item = self.find_item(item_id)
        if item is None:
            raise InvalidArgument(f"Unknown item id: {item_id}")
        return item

    def borrowed_items(self) -> List[LibraryItem]:
        return [it for it in self.items if not it.available]

    # ---- circulation
    def borrow(self, item_id: int, days: int) -> Tuple[bool, str]:
        with self._lock:
            return self.get_item(item_id).borrow(days, self.policy, self.fines)

    def return_item(self, item_id: int) -> Tuple[bool, str]:
        with self._lock:
            return self.get_item(item_id).return_item(self.fines, self.overdue_penalty)

    def buy(self, item_id: int, price: int) -> Tuple[bool, str]:
        with self._lock:
            return self.get_item(item_id).mark_sold(price, self.fines)

    def advance_item(self, item_id: int) -> None:
        with self._lock:
            self.get_item(item_id).advance_one_day()

    def advance_one_day(self) -> str:
        with self._lock:
            for it in self.items:
                it.advance_one_day()
        logger.info("Advanced one day for %d item(s)", len(self.items))
        return "A new day has passed. Borrowed items updated."

    # ---- reports
    def fine_rate(self) -> int:
        return self.policy.calculate(1)

    def report_fines(self) -> Optional[pd.DataFrame]:
        return self.fines.report_fines()

    def report_stats(self) -> LibraryStats:
        return self.fines.report_stats(self.items)

    def export_report_items(self) -> pd.DataFrame:
        return self.fines.export_report_items(self.items)


def seed_catalog(catalog: Catalog) -> List[LibraryItem]:
    """Add the three starter items every session opens with."""
    return [
        catalog.add_book("Harry Potter and the Sorcerer's Stone", "J.K. Rowling", 309),
        catalog.add_audiobook("Becoming", "Michelle Obama", 19.5),
        catalog.add_emagazine("National Geographic", "Various", 202),
    ]


# ---------------- CLI ----------------
FAREWELLS = [
    "Have a great reading journey!",
    "See you next time!",
    "Keep turning the pages!",
    "Happy Listening!",
    "Stay updated with great reads!",
    "Knowledge is power, keep exploring!",
]


def input_prompt(prompt: str) -> str:
    """Read one stripped answer; EOF or Ctrl-C reads as an empty answer, which ends the menu."""
    try:
        return input(prompt).strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return ""


def read_int(prompt: str) -> Optional[int]:
    raw = input_prompt(prompt)
    try:
        return int(raw)
    except ValueError:
        print(f"Not a number: {raw!r}")
        return None


def print_menu():
    print("\n===== MENU =====")
    print("1. Show all items")
    print("2. Search items")
    print("3. Return item")
    print("4. Show reports")
    print("5. Next day (simulate)")
    print("6. Show borrowed items")
    print("7. Item extras (play sample / archive issue)")
    print("0. Exit")


def print_reports(catalog: Catalog):
    print("\nFine Records:")
    fines = catalog.report_fines()
    if fines is None or fines.empty:
        print("No fines yet")
    else:
        for _, row in fines.iterrows():
            print(f"Item {row['Item ID']} -> {CURRENCY}{row['Fine']}")

    stats = catalog.report_stats()
    print("\n===== Library Stats =====")
    if stats.most_borrowed_title is not None:
        print(f"Most Borrowed: \"{stats.most_borrowed_title}\" ({stats.most_borrowed_count} times)")
    print(f"Total Fines Collected: {CURRENCY}{stats.total_fines}")
    print(f"Total Purchases: {CURRENCY}{stats.total_purchases}")


def search_flow(catalog: Catalog):
    """
    Search by keyword, then offer borrow/buy for every available match.
    """
    keyword = input_prompt("Keyword: ")
    matches = catalog.search(keyword)
    if not matches:
        print("No matches found!")
        return
    for it in matches:
        print(it.describe())
        if not it.available:
            print(it.not_available_msg())
            continue
        choice = input_prompt("(1)Borrow (2)Buy: ")
        if choice == "1":
            days = read_int("Days: ")
            if days is not None:
                ok, msg = catalog.borrow(it.item_id, days)
                print(msg)
        elif choice == "2":
            price = read_int("Price: ")
            if price is not None:
                ok, msg = catalog.buy(it.item_id, price)
                print(msg)
        else:
            print("Skipped.")


def show_borrowed(catalog: Catalog):
    print("\n===== Borrowed Items =====")
    borrowed = catalog.borrowed_items()
    if not borrowed:
        print("No items are currently borrowed")
    for it in borrowed:
        print(it.describe())


def item_extras(catalog: Catalog):
    item_id = read_int("Item ID: ")
    if item_id is None:
        return
    item = catalog.find_item(item_id)
    if item is None:
        print("Invalid ID")
        return
    if item.capability is Capability.PLAYABLE:
        ok, msg = item.play_sample()
    elif item.capability is Capability.ARCHIVABLE:
        ok, msg = item.archive()
    else:
        msg = f"No extras for \"{item.title}\"."
    print(msg)


def cli_loop(catalog: Catalog):
    """
    Interactive command-loop for the catalog.

    Presents a text menu, accepts user input and invokes `Catalog` methods.
    Inputs the catalog rejects are reported and the loop carries on.
    """
    while True:
        print_menu()
        choice = input_prompt("Choice: ")
        try:
            if choice == "0" or choice == "":
                print("\n" + random.choice(FAREWELLS) + "\n")
                break
            elif choice == "1":
                for it in catalog.list_items():
                    print(it.describe())
            elif choice == "2":
                search_flow(catalog)
            elif choice == "3":
                item_id = read_int("ID to return: ")
                if item_id is None:
                    continue
                if catalog.find_item(item_id) is None:
                    print("Invalid ID")
                    continue
                ok, msg = catalog.return_item(item_id)
                print(msg)
            elif choice == "4":
                print_reports(catalog)
            elif choice == "5":
                print(catalog.advance_one_day())
            elif choice == "6":
                show_borrowed(catalog)
            elif choice == "7":
                item_extras(catalog)
            else:
                print("Unknown choice. Try again.")
        except InvalidArgument as e:
            logger.warning("Rejected input: %s", e)
            print(f"Invalid input: {e}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Library catalog: borrow, buy, return and fines")
    parser.add_argument("--rate", type=int, default=DEFAULT_FINE_RATE, help="Fine per borrowed day")
    parser.add_argument("--penalty", type=int, default=OVERDUE_PENALTY, help="Flat fine for an overdue return")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level for catalog events")
    parser.add_argument("--no-seed", action="store_true", help="Start with an empty catalog")
    return parser


def demo_run(argv: Optional[List[str]] = None):
    """
    Start an interactive session with the seed items and run the CLI loop.
    """
    args = build_parser().parse_args(argv)
    logger.setLevel(getattr(logging, args.log_level))

    catalog = Catalog(policy=FinePolicy(args.rate), overdue_penalty=args.penalty)
    if not args.no_seed:
        seed_catalog(catalog)
    cli_loop(catalog)
    return catalog


def main():
    demo_run()


if __name__ == "__main__":
    main()
