from billbook import config
from billbook.printing.bill_html import render_bill_html


def test_layout_carries_bill_details(dyeing_bill):
    html = render_bill_html(dyeing_bill)

    assert config.BUSINESS_NAME in html
    assert f"GST IN: {config.BUSINESS_GSTIN}" in html
    assert "<b>Bill No:</b> 1" in html
    assert "15/01/2024" in html
    assert "Ramesh Textiles" in html
    assert "08ABCDE1234F1Z5" in html
    assert "<td align='center'>1</td><td>Dyeing</td><td align='center'>10</td><td align='center'>50</td>" in html
    assert "CGST @ 2.5%" in html
    assert "<b>525.00</b>" in html
    assert "Five Hundred and Twenty Five Rupees Only" in html
    assert "Authorised Signatory" in html


def test_user_text_is_escaped(dyeing_bill):
    dyeing_bill.customer_name = "<script>alert(1)</script>"
    dyeing_bill.items[0].description = "Silk & Cotton"

    html = render_bill_html(dyeing_bill)

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "Silk &amp; Cotton" in html
