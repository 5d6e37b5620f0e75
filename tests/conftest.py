"""Shared schema fixtures for fixlens tests."""

from pathlib import Path

import pytest
from lxml import etree

from fixlens.dictionary import DictionaryStore


# Trimmed QuickFIX 4.4 data dictionary. Field references under <header> and
# <messages> carry no number and must not be mistaken for definitions.
FIX44_XML = """
<fix major="4" minor="4">
  <header>
    <field name="BeginString" required="Y"/>
    <field name="MsgType" required="Y"/>
  </header>
  <messages>
    <message name="NewOrderSingle" msgtype="D" msgcat="app">
      <field name="Side" required="Y"/>
    </message>
  </messages>
  <fields>
    <field number="8" name="BeginString" type="STRING"/>
    <field number="9" name="BodyLength" type="LENGTH"/>
    <field number="10" name="CheckSum" type="STRING"/>
    <field number="35" name="MsgType" type="STRING">
      <value enum="0" description="HEARTBEAT"/>
      <value enum="8" description="EXECUTION_REPORT"/>
      <value enum="D" description="NewOrderSingle"/>
    </field>
    <field number="38" name="OrderQty" type="QTY"/>
    <field number="40" name="OrdType" type="CHAR">
      <value enum="1" description="MARKET"/>
      <value enum="2" description="LIMIT"/>
    </field>
    <field number="44" name="Price" type="PRICE"/>
    <field number="54" name="Side" type="CHAR">
      <value enum="1" description="Buy"/>
      <value enum="2" description="Sell"/>
    </field>
    <field number="55" name="Symbol" type="STRING"/>
  </fields>
</fix>
"""

# Older dictionary with a different description for the same Side value
FIX42_MAPPING = {
    'fields': [
        {'number': 8, 'name': 'BeginString'},
        {'number': 35, 'name': 'MsgType', 'values': [
            {'enum': 'D', 'description': 'ORDER_SINGLE'},
        ]},
        {'number': 54, 'name': 'Side', 'values': [
            {'enum': '1', 'description': 'BUY'},
            {'enum': '2', 'description': 'SELL'},
        ]},
    ],
}

SAMPLE_LINE = "8=FIX.4.4\x019=65\x0135=D\x0154=2\x0155=IBM\x0138=100\x0110=123\x01"


@pytest.fixture
def fix44_root():
    """Parsed FIX 4.4 schema root element."""
    return etree.fromstring(FIX44_XML)


@pytest.fixture
def store(fix44_root) -> DictionaryStore:
    """Store with FIX.4.4 (XML) and FIX.4.2 (mapping) loaded."""
    return DictionaryStore.load({
        'FIX.4.4': fix44_root,
        'FIX.4.2': FIX42_MAPPING,
    })


@pytest.fixture
def schema_dir(tmp_path: Path) -> Path:
    """Directory holding the sample schemas as files."""
    (tmp_path / 'FIX44.xml').write_text(FIX44_XML)
    (tmp_path / 'FIX42.yml').write_text(
        "fields:\n"
        "  '8': {name: BeginString}\n"
        "  '35':\n"
        "    name: MsgType\n"
        "    enum: {D: ORDER_SINGLE}\n"
        "  '54':\n"
        "    name: Side\n"
        "    enum: {'1': BUY, '2': SELL}\n"
    )
    return tmp_path
