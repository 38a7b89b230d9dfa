# ==============================================================================
# targetplanner/calculator/session.py
# ------------------------------------------------------------------------------
# Holds the planner state for one browser session: the revenue goal, the
# ordered product list and the latest result set. Kept in memory only.
# ==============================================================================

import time
import secrets
import logging
from config import Config
from targetplanner.models import ProductInput
from .schema import PRODUCT_FIELDS


def product_letter(index):
    """
    Spreadsheet-style column label for a zero-based index:
    0 -> 'A', 25 -> 'Z', 26 -> 'AA', 27 -> 'AB'.
    """
    label = ''
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        label = chr(65 + remainder) + label
    return label


def default_product_name(count):
    return f"Product {product_letter(count)}"


class PlannerSession:
    """
    The explicit state object passed to the gate and the calculator.
    Product ids come from a per-session counter and are never reused.
    """

    def __init__(self, product_count=Config.DEFAULT_PRODUCT_COUNT):
        self.product_count = product_count
        self.reset()

    def __repr__(self):
        return f'<PlannerSession {len(self.products)} products>'

    def add_product(self):
        """Appends an empty product named after the current product count."""
        product = ProductInput(id=self.next_id, name=default_product_name(len(self.products)))
        self.next_id += 1
        self.products.append(product)
        return product

    def get_product(self, product_id):
        for product in self.products:
            if product.id == product_id:
                return product
        raise KeyError(product_id)

    def remove_product(self, product_id):
        """Removes a product by id; the remaining products keep their order."""
        product = self.get_product(product_id)
        self.products = [p for p in self.products if p.id != product_id]
        return product

    def update_product(self, product_id, **values):
        product = self.get_product(product_id)
        for key, value in values.items():
            if key != 'name' and key not in PRODUCT_FIELDS:
                raise AttributeError(f"ProductInput has no editable field '{key}'")
            setattr(product, key, value)
        return product

    def snapshot(self):
        """Copies of the current products, safe to hand to the calculator."""
        return [p.copy() for p in self.products]

    def set_results(self, revenue_goal, results):
        """Replaces the previous result set wholesale."""
        self.results = tuple(results)
        self.results_revenue_goal = revenue_goal

    def clear_results(self):
        self.results = None
        self.results_revenue_goal = None

    def reset(self):
        """Back to the initial state: no goal, no results, fresh empty products."""
        self.revenue_goal = None
        self.products = []
        self.next_id = 1
        self.clear_results()
        for _ in range(self.product_count):
            self.add_product()


class SessionStore:
    """
    In-process registry of planner sessions keyed by a random token that the
    browser keeps in its signed session cookie. Sessions not used for
    idle_timeout seconds are discarded on the next lookup.
    """

    def __init__(self, product_count=Config.DEFAULT_PRODUCT_COUNT,
                 idle_timeout=Config.SESSION_IDLE_TIMEOUT, clock=time.monotonic):
        self.product_count = product_count
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._sessions = {}
        self._last_seen = {}

    def __len__(self):
        return len(self._sessions)

    def get(self, token):
        if token is None:
            return None
        return self._sessions.get(token)

    def create(self):
        token = secrets.token_urlsafe(16)
        self._sessions[token] = PlannerSession(self.product_count)
        self._last_seen[token] = self._clock()
        logging.info(f"Created planner session ({len(self._sessions)} active)")
        return token, self._sessions[token]

    def get_or_create(self, token):
        """Returns the session for token, starting a new one if it is unknown or expired."""
        self.purge_idle()
        planner = self.get(token)
        if planner is None:
            return self.create()
        self._last_seen[token] = self._clock()
        return token, planner

    def purge_idle(self):
        """Discards every session idle for longer than idle_timeout. Returns the count."""
        if not self.idle_timeout:
            return 0
        cutoff = self._clock() - self.idle_timeout
        stale = [token for token, seen in self._last_seen.items() if seen < cutoff]
        for token in stale:
            self.discard(token)
        if stale:
            logging.info(f"Discarded {len(stale)} idle planner session(s)")
        return len(stale)

    def discard(self, token):
        self._sessions.pop(token, None)
        self._last_seen.pop(token, None)

    def clear(self):
        count = len(self._sessions)
        self._sessions.clear()
        self._last_seen.clear()
        return count
