"""Pytest fixtures for constref tests."""

import tempfile
from pathlib import Path

import pytest

from constref.extractor import Extractor
from constref.namespace_index import AutoloadRoot, NamespaceIndex


@pytest.fixture
def temp_dir():
    """Create a temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_files(root: Path, files: dict[str, str]) -> None:
    """Write files (relative path -> content) under root, creating directories."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


SHOP_FILES = {
    "app/models/order.rb": """class Order < ApplicationRecord
  include Trackable

  def invoice
    Billing::Invoice.new(order: self)
  end
end
""",
    "app/models/billing/invoice.rb": """module Billing
  class Invoice
    def order
      Order.find(1)
    end

    def lines
      LineItem.where(invoice: self)
    end
  end
end
""",
    "app/models/billing/line_item.rb": """module Billing
  class LineItem
  end
end
""",
    "app/models/concerns/trackable.rb": """module Trackable
end
""",
    "app/services/billing/charge.rb": """module Billing
  class Charge
    def call
      Stripe::Charge.create(amount: Invoice.last.total)
    end
  end
end
""",
    "app/views/orders/index.html.erb": "<%= Order.count %>\n",
}


@pytest.fixture
def shop_app(temp_dir):
    """Create a small Rails-like application.

    Namespaces: Order, Billing (directory only), Billing::Invoice,
    Billing::LineItem, Billing::Charge, Trackable.
    """
    root = temp_dir / "shop"
    write_files(root, SHOP_FILES)
    yield root


@pytest.fixture
def shop_extractor(shop_app):
    """Extractor for the shop application using its default autoload roots."""
    return Extractor.from_project(shop_app)


def build_index(root: Path, files: dict[str, str], roots=("app/models",)) -> NamespaceIndex:
    """Write files and index them from the given roots."""
    write_files(root, files)
    return NamespaceIndex.build(root, [AutoloadRoot.create(r) for r in roots])
