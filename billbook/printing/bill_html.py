"""Print-ready HTML layout of a single bill."""

from __future__ import annotations

from html import escape
from typing import List

from billbook import config
from billbook.calculator import format_currency, format_display_date, format_number
from billbook.models import Bill


def render_bill_html(bill: Bill) -> str:
    """Return the A4 bill layout used by both the view dialog and the printer."""
    rows: List[str] = []
    for index, item in enumerate(bill.items, start=1):
        rows.append(
            f"<tr><td align='center'>{index}</td>"
            f"<td>{escape(item.description)}</td>"
            f"<td align='center'>{format_number(item.quantity)}</td>"
            f"<td align='center'>{format_number(item.rate)}</td>"
            f"<td align='right'>{format_currency(item.amount)}</td></tr>"
        )

    return f"""
    <html>
    <head>
        <style>
            body {{ font-family: Arial; font-size: 10pt; }}
            h1 {{ text-align: center; margin: 0; text-transform: uppercase; }}
            .header p {{ text-align: center; margin: 2px 0; }}
            table {{ width: 100%; border-collapse: collapse; }}
            .items th, .items td {{ border: 1px solid #999; padding: 4px; }}
            .totals td {{ padding: 3px 0; }}
            .words {{ font-style: italic; }}
        </style>
    </head>
    <body>
        <div class='header'>
            <h1>{escape(config.BUSINESS_NAME)}</h1>
            <p>{escape(config.BUSINESS_TAGLINE)}</p>
            <p>{escape(config.BUSINESS_ADDRESS)}</p>
            <p>GST IN: {escape(config.BUSINESS_GSTIN)}</p>
        </div>
        <hr />
        <table>
            <tr>
                <td><b>Bill No:</b> {escape(bill.bill_no)}</td>
                <td><b>Date:</b> {escape(format_display_date(bill.date))}</td>
            </tr>
            <tr>
                <td><b>Customer Name:</b> {escape(bill.customer_name)}</td>
                <td><b>State:</b> {escape(bill.customer_state)}</td>
            </tr>
            <tr>
                <td><b>Address:</b> {escape(bill.customer_address)}</td>
                <td><b>State Code:</b> {escape(bill.state_code)}</td>
            </tr>
            <tr><td colspan='2'><b>GSTIN:</b> {escape(bill.customer_gstin)}</td></tr>
        </table>
        <br />
        <table class='items'>
            <tr><th>S.No.</th><th align='left'>Description</th><th>Qty</th><th>Rate</th><th align='right'>Amount</th></tr>
            {''.join(rows)}
        </table>
        <br />
        <table>
            <tr>
                <td width='50%' valign='top'>
                    <p><b>Amount in Words:</b></p>
                    <p class='words'>{escape(bill.amount_in_words)}</p>
                    <p>Bank Details:<br />
                    For: {escape(config.BUSINESS_NAME.title())}<br />
                    Bank: {escape(config.BANK_NAME)}<br />
                    A/c No: {escape(config.BANK_ACCOUNT_NO)}<br />
                    IFSC: {escape(config.BANK_IFSC)}<br />
                    Branch: {escape(config.BANK_BRANCH)}</p>
                </td>
                <td width='50%' valign='top'>
                    <table class='totals'>
                        <tr><td align='right'>Net Amount:</td><td align='right'>{format_currency(bill.net_amount)}</td></tr>
                        <tr><td align='right'>CGST @ {escape(bill.cgst_percent)}%:</td><td align='right'>{format_currency(bill.cgst_amount)}</td></tr>
                        <tr><td align='right'>SGST @ {escape(bill.sgst_percent)}%:</td><td align='right'>{format_currency(bill.sgst_amount)}</td></tr>
                        <tr><td align='right'>IGST @ {escape(bill.igst_percent)}%:</td><td align='right'>{format_currency(bill.igst_amount)}</td></tr>
                        <tr><td align='right'><b>TOTAL AMOUNT:</b></td><td align='right'><b>{format_currency(bill.total_amount)}</b></td></tr>
                    </table>
                </td>
            </tr>
        </table>
        <br /><br />
        <table>
            <tr>
                <td><b>Receiver's Signature</b></td>
                <td align='right'><b>For {escape(config.BUSINESS_NAME)}</b><br /><br /><br />Authorised Signatory</td>
            </tr>
        </table>
    </body>
    </html>
    """
