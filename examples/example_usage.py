"""Ví dụ: dùng service layer (không qua Flask).

Dàn trang một báo giá nhiều dòng và in số trang / chiều cao từng trang.
"""

from src.logistics_portal.logistics_portal.layout.service import DocumentLayoutService


def main():
    quote = {
        "term": "FOB",
        "route": "HCM - LAX",
        "commodity": "Garments",
        "rows": [
            {"cost": f"Phí dịch vụ {i}", "unit": "Cont", "qty": 1, "price": 1_000_000 + i * 10_000, "vat": 10, "currency": "VND"}
            for i in range(1, 41)
        ],
    }
    doc = DocumentLayoutService().layout("quotation", quote)
    for page in doc.pages:
        print(f"Trang {page.index}/{doc.page_count}: {len(page.content)} khối, cao {page.height:.0f}px")


if __name__ == "__main__":
    main()
