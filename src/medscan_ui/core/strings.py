"""
Report and Panel Strings
========================

User-facing labels for the results panel and the exported reports, in the two
supported locales. The Turkish set is the product default.

Functions
---------
strings_for
    Pick the string set for a locale tag
format_report_date
    Render a date the way the locale writes short dates
"""

from dataclasses import dataclass, field
from datetime import date

from .analysis_kinds import AnalysisKind


@dataclass(frozen=True)
class KindText:
    title: str
    description: str
    formats: str
    tab_label: str


@dataclass(frozen=True)
class ReportStrings:
    locale: str
    app_title: str
    report_title: str
    results_title: str
    date_label: str
    analysis_type_label: str
    result_label: str
    confidence_label: str
    probabilities_label: str
    tumor_label: str
    normal_label: str
    detected: str
    not_detected: str
    advice_detected: str
    advice_clear: str
    overlay_title: str
    overlay_caption: str
    analyze_button: str
    pdf_button: str
    csv_button: str
    kinds: dict = field(default_factory=dict)

    def kind(self, kind: AnalysisKind) -> KindText:
        return self.kinds[kind]


TURKISH = ReportStrings(
    locale="tr-TR",
    app_title="Tıbbi Görüntü Analizi",
    report_title="Tıbbi Görüntü Analizi Raporu",
    results_title="Tıbbi Görüntü Analizi Sonuçları",
    date_label="Tarih",
    analysis_type_label="Analiz Tipi",
    result_label="Sonuç",
    confidence_label="Güven Oranı",
    probabilities_label="Olasılık Değerleri",
    tumor_label="Tümör",
    normal_label="Normal",
    detected="Tümör Tespit Edildi",
    not_detected="Tümör Tespit Edilmedi",
    advice_detected=(
        "Görüntüde tümör belirtisi tespit edildi. "
        "Lütfen bir sağlık kuruluşuna başvurun."
    ),
    advice_clear=(
        "Görüntüde tümör belirtisi tespit edilmedi. "
        "Ancak düzenli kontrolleri ihmal etmeyin."
    ),
    overlay_title="Tümör Konumu",
    overlay_caption=(
        "Kırmızı ile işaretlenmiş alanlar tümör şüphesi bulunan bölgeleri gösterir"
    ),
    analyze_button="Analiz Et",
    pdf_button="PDF Olarak İndir",
    csv_button="CSV Olarak İndir",
    kinds={
        AnalysisKind.BRAIN_TUMOR: KindText(
            "Beyin Tümörü Tespiti",
            "MR görüntülerinde beyin tümörü tespiti yapar.",
            "MR görüntüleri (DICOM, JPG, PNG)",
            "Beyin Tümörü",
        ),
        AnalysisKind.CANCER: KindText(
            "Kanser Tespiti",
            "Histopatolojik görüntülerde kanser tespiti yapar.",
            "Mikroskop görüntüleri (JPG, PNG, TIFF)",
            "Kanser",
        ),
        AnalysisKind.ALZHEIMER: KindText(
            "Alzheimer Tespiti",
            "Beyin MR görüntülerinde Alzheimer belirtilerini tespit eder.",
            "MR görüntüleri (DICOM, JPG, PNG)",
            "Alzheimer",
        ),
    },
)

ENGLISH = ReportStrings(
    locale="en-US",
    app_title="Medical Image Analysis",
    report_title="Medical Image Analysis Report",
    results_title="Medical Image Analysis Results",
    date_label="Date",
    analysis_type_label="Analysis Type",
    result_label="Result",
    confidence_label="Confidence",
    probabilities_label="Probabilities",
    tumor_label="Tumor",
    normal_label="Normal",
    detected="Tumor Detected",
    not_detected="No Tumor Detected",
    advice_detected=(
        "Signs of a tumor were detected in the image. "
        "Please consult a healthcare provider."
    ),
    advice_clear=(
        "No signs of a tumor were detected in the image. "
        "Do not skip your regular check-ups."
    ),
    overlay_title="Tumor Location",
    overlay_caption="Areas outlined in red indicate suspected tumor regions",
    analyze_button="Analyze",
    pdf_button="Download PDF",
    csv_button="Download CSV",
    kinds={
        AnalysisKind.BRAIN_TUMOR: KindText(
            "Brain Tumor Detection",
            "Detects brain tumors in MR images.",
            "MR images (DICOM, JPG, PNG)",
            "Brain Tumor",
        ),
        AnalysisKind.CANCER: KindText(
            "Cancer Detection",
            "Detects cancer in histopathology images.",
            "Microscopy images (JPG, PNG, TIFF)",
            "Cancer",
        ),
        AnalysisKind.ALZHEIMER: KindText(
            "Alzheimer Detection",
            "Detects signs of Alzheimer's disease in brain MR images.",
            "MR images (DICOM, JPG, PNG)",
            "Alzheimer",
        ),
    },
)

_BY_LOCALE = {"tr-TR": TURKISH, "en-US": ENGLISH}


def strings_for(locale: str) -> ReportStrings:
    return _BY_LOCALE.get(locale, ENGLISH)


def format_report_date(d: date, locale: str) -> str:
    """
    Format a date as a short locale date.

    ``tr-TR`` gives ``18.10.2026``, ``en-US`` gives ``10/18/2026``; any other
    locale falls back to ISO 8601.
    """
    if locale == "tr-TR":
        return f"{d.day:02d}.{d.month:02d}.{d.year}"
    if locale == "en-US":
        return f"{d.month}/{d.day}/{d.year}"
    return d.isoformat()
