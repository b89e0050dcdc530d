"""
Tool Catalog

Every PDFflow tool with its category, icon and whether it is premium.
Premium tools give free visitors 4 uses in total before requiring Pro;
the other tools are free.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class ToolCategory(str, Enum):
    CORE = "core"
    CONVERT = "convert"
    EDIT = "edit"
    SECURITY = "security"
    IMAGES = "images"
    OPTIMIZE = "optimize"
    ADVANCED = "advanced"
    DOCUMENTS = "documents"


CATEGORY_INFO: Dict[ToolCategory, Dict[str, str]] = {
    ToolCategory.CORE: {"name": "Core PDF", "description": "Essential PDF operations"},
    ToolCategory.CONVERT: {"name": "Convert", "description": "Format conversions"},
    ToolCategory.EDIT: {"name": "Edit & Enhance", "description": "Modify and enhance PDFs"},
    ToolCategory.SECURITY: {"name": "Security", "description": "Protect and secure PDFs"},
    ToolCategory.IMAGES: {"name": "Image Tools", "description": "Image manipulation"},
    ToolCategory.OPTIMIZE: {"name": "Optimize", "description": "Improve PDF quality"},
    ToolCategory.ADVANCED: {"name": "Advanced", "description": "Power user tools"},
    ToolCategory.DOCUMENTS: {"name": "Documents", "description": "Document utilities"},
}


@dataclass(frozen=True)
class ToolInfo:
    slug: str
    name: str
    description: str
    category: ToolCategory
    icon: str
    premium: bool = False

    @property
    def href(self) -> str:
        return f"/{self.slug}"


DEFAULT_TOOL_ICON = "FileText"


def _tools(category: ToolCategory, *entries) -> List[ToolInfo]:
    return [
        ToolInfo(slug=slug, name=name, description=description, category=category, icon=icon, premium=premium)
        for slug, name, description, icon, premium in entries
    ]


TOOLS: List[ToolInfo] = (
    # Core PDF - all free
    _tools(
        ToolCategory.CORE,
        ("merge", "Merge PDF", "Combine multiple PDFs into one", "Combine", False),
        ("split", "Split PDF", "Extract or divide your PDF", "Split", False),
        ("compress", "Compress PDF", "Reduce file size, keep quality", "FileDown", False),
        ("rotate", "Rotate PDF", "Rotate pages any direction", "RotateCw", False),
        ("reorder", "Reorder Pages", "Drag & drop to rearrange", "ArrowUpDown", False),
        ("delete-pages", "Delete Pages", "Remove unwanted pages", "Trash2", False),
        ("extract-pages", "Extract Pages", "Save specific pages as new PDF", "FileOutput", False),
        ("reverse-pages", "Reverse Pages", "Flip page order", "ArrowDownUp", False),
        ("duplicate-pages", "Duplicate Pages", "Copy specific pages", "Copy", False),
        ("add-blank-pages", "Add Blank Pages", "Insert blank pages anywhere", "FilePlus", False),
        ("remove-blank-pages", "Remove Blank Pages", "Detect and remove blank pages", "FileX", False),
        ("page-count", "Page Count", "Count pages in PDFs", "Hash", False),
    )
    # Convert - basic free, document conversions premium
    + _tools(
        ToolCategory.CONVERT,
        ("pdf-to-image", "PDF to Image", "Convert pages to PNG/JPG", "Image", False),
        ("image-to-pdf", "Image to PDF", "Create PDF from images", "FileImage", False),
        ("pdf-to-word", "PDF to Word", "Convert to editable DOCX", "FileText", True),
        ("pdf-to-excel", "PDF to Excel", "Extract tables to spreadsheet", "Table", True),
        ("pdf-to-powerpoint", "PDF to PowerPoint", "Convert to slide images", "Presentation", True),
        ("pdf-to-html", "PDF to HTML", "Convert PDF to HTML", "Code2", True),
        ("pdf-to-markdown", "PDF to Markdown", "Convert to Markdown format", "FileCode", True),
        ("pdf-to-txt", "PDF to TXT", "Extract plain text", "FileText", False),
        ("pdf-to-svg", "PDF to SVG", "Convert to vector format", "Shapes", True),
        ("pdf-to-base64", "PDF to Base64", "Convert PDF to Base64 string", "Binary", False),
        ("pdf-to-tiff", "PDF to TIFF", "Convert PDF to high-quality images", "Image", True),
        ("html-to-pdf", "HTML to PDF", "Convert web pages to PDF", "Code", True),
        ("markdown-to-pdf", "Markdown to PDF", "Convert Markdown to PDF", "FileCode2", True),
        ("text-to-pdf", "Text to PDF", "Convert text to PDF", "FileText", False),
    )
    # Edit & Enhance - basic free, advanced premium
    + _tools(
        ToolCategory.EDIT,
        ("crop", "Crop PDF", "Trim and resize pages", "Crop", False),
        ("watermark", "Watermark", "Add text or image watermarks", "Droplets", False),
        ("sign", "Sign PDF", "Add signatures & initials", "PenTool", False),
        ("page-numbers", "Page Numbers", "Add page numbering", "Hash", False),
        ("headers-footers", "Headers & Footers", "Add custom headers/footers", "Type", True),
        ("add-background", "Add Background", "Add color or image background", "ImagePlus", True),
        ("add-border", "Add Border", "Add decorative borders", "Square", True),
        ("add-margins", "Add Margins", "Add space around pages", "Square", True),
        ("stamp", "Stamp PDF", "Add rubber stamp annotations", "Stamp", True),
        ("add-qr-code", "Add QR Code", "Add QR codes to PDF pages", "QrCode", True),
        ("add-grid", "Add Grid", "Add grid overlay to PDFs", "Grid3X3", True),
        ("add-bookmarks", "Add Bookmarks", "Add navigation bookmarks", "Bookmark", True),
        ("bates-numbering", "Bates Numbering", "Add legal Bates numbers", "ListOrdered", True),
        ("add-page-labels", "Add Page Labels", "Custom page numbering", "Tag", True),
        ("overlay", "Overlay PDFs", "Layer PDFs on top of each other", "Layers3", True),
        ("center-content", "Center Content", "Center content on new page size", "AlignCenter", True),
        ("metadata", "Edit Metadata", "View & edit PDF properties", "FileText", True),
    )
    # Security - all premium
    + _tools(
        ToolCategory.SECURITY,
        ("encrypt", "Encrypt PDF", "Add password protection", "Lock", True),
        ("unlock", "Unlock PDF", "Remove PDF password", "Unlock", True),
        ("redact", "Redact PDF", "Hide sensitive information", "EyeOff", True),
        ("remove-metadata", "Remove Metadata", "Strip all PDF metadata", "ShieldOff", True),
        ("remove-links", "Remove Links", "Remove hyperlinks from PDF", "Link2Off", True),
        ("remove-annotations", "Remove Annotations", "Strip PDF annotations", "MessageSquareOff", True),
    )
    # Image Tools - basic free, effects premium
    + _tools(
        ToolCategory.IMAGES,
        ("grayscale-images", "Grayscale Images", "Convert images to B&W", "Palette", True),
        ("resize-images", "Resize Images", "Batch resize images", "Scaling", True),
        ("rotate-images", "Rotate Images", "Batch rotate images", "RotateCw", False),
        ("crop-images", "Crop Images", "Batch crop images", "Crop", False),
        ("flip-images", "Flip Images", "Mirror images horizontally/vertically", "FlipVertical2", False),
        ("compress-images", "Compress Images", "Reduce image file sizes", "Minimize2", True),
        ("negative-images", "Negative Images", "Invert image colors", "CircleOff", True),
        ("pixelate-images", "Pixelate Images", "Apply pixelation effect", "Grid2X2", True),
        ("add-text-to-images", "Add Text to Images", "Overlay text on images", "Type", True),
        ("add-frame", "Add Frame", "Add decorative frames", "Frame", True),
        ("image-saturation", "Image Saturation", "Adjust color saturation", "Droplet", True),
        ("image-hue", "Shift Hue", "Shift image colors", "Rainbow", True),
        ("vignette", "Vignette", "Add vignette effect", "Circle", True),
        ("image-noise", "Add Noise", "Add film grain noise", "Tv", True),
        ("image-posterize", "Posterize", "Reduce color levels", "Layers2", True),
        ("image-to-base64", "Image to Base64", "Convert images to Base64", "Binary", False),
        ("extract-images", "Extract Images", "Pull images from PDF", "ImageIcon", False),
        ("sepia", "Sepia PDF", "Apply vintage sepia tone", "Sun", True),
    )
    # Optimize - all premium
    + _tools(
        ToolCategory.OPTIMIZE,
        ("flatten", "Flatten PDF", "Flatten forms & layers", "Layers", True),
        ("repair", "Repair PDF", "Fix corrupted PDFs", "Wrench", True),
        ("linearize", "Web Optimize", "Optimize for fast web viewing", "Globe", True),
        ("deskew", "Deskew PDF", "Straighten scanned pages", "RotateCw", True),
        ("auto-rotate", "Auto Rotate", "Fix page orientation automatically", "RotateCcw", True),
        ("sharpen", "Sharpen PDF", "Enhance edges and details", "Focus", True),
        ("blur", "Blur PDF", "Add blur effect to pages", "CircleDot", True),
        ("brightness", "Brightness/Contrast", "Adjust brightness & contrast", "SunMedium", True),
        ("grayscale", "Grayscale PDF", "Convert to black & white", "Palette", True),
        ("invert-colors", "Invert Colors", "Create negative/inverted PDF", "Contrast", True),
    )
    # Advanced - premium except the outline viewer
    + _tools(
        ToolCategory.ADVANCED,
        ("n-up", "N-Up Layout", "Multiple pages per sheet", "Grid", True),
        ("tile", "Tile PDF", "Split pages into tiles", "LayoutGrid", True),
        ("poster", "Create Poster", "Split page for large prints", "Expand", True),
        ("booklet", "Create Booklet", "Reorder pages for booklet printing", "BookOpen", True),
        ("mirror", "Mirror PDF", "Flip pages horizontally/vertically", "FlipHorizontal2", True),
        ("interleave", "Interleave PDFs", "Alternate pages from two PDFs", "Shuffle", True),
        ("scale", "Scale PDF", "Scale pages by percentage", "ZoomIn", True),
        ("resize", "Resize PDF", "Change page dimensions", "Maximize2", True),
        ("sort-pages", "Sort Pages", "Sort pages by size", "ArrowUpAZ", True),
        ("split-every-n", "Split Every N", "Split by page count", "Scissors", True),
        ("split-by-size", "Split by Size", "Split by file size limit", "HardDrive", True),
        ("compare-pdfs", "Compare PDFs", "Side-by-side comparison", "GitCompare", True),
        ("pdf-diff", "PDF Diff", "Compare two PDFs", "GitCompareArrows", True),
        ("pdf-outline", "PDF Outline", "View table of contents", "List", False),
        ("odd-even-pages", "Odd/Even Pages", "Extract odd or even pages", "SplitSquareVertical", True),
        ("remove-pages", "Remove Pages", "Delete specific pages", "MinusSquare", True),
    )
    # Documents - info free, conversions premium
    + _tools(
        ToolCategory.DOCUMENTS,
        ("json-to-pdf", "JSON to PDF", "Convert JSON to PDF", "Braces", True),
        ("csv-to-pdf", "CSV to PDF", "Convert CSV to PDF tables", "Table", True),
        ("ocr", "OCR PDF", "Extract text from scans", "ScanLine", True),
        ("word-count", "Word Count", "Count words in PDFs", "FileText", False),
        ("add-attachment", "Add Attachment", "Embed files in PDF", "Paperclip", True),
        ("extract-text", "Extract Text", "Pull text from PDF", "FileText", False),
        ("page-info", "Page Info", "View PDF details & metadata", "Info", False),
    )
)

_BY_SLUG: Dict[str, ToolInfo] = {tool.slug: tool for tool in TOOLS}


def get_tool(slug_or_href: str) -> Optional[ToolInfo]:
    """Look up a tool by slug ("merge") or href ("/merge")"""
    return _BY_SLUG.get(slug_or_href.strip("/"))


def is_tool_premium(slug_or_href: str) -> bool:
    tool = get_tool(slug_or_href)
    return tool.premium if tool else False


def get_tools_by_category(category: Optional[ToolCategory] = None) -> List[ToolInfo]:
    """Tools in a category, or all tools when category is None"""
    if category is None:
        return list(TOOLS)
    return [tool for tool in TOOLS if tool.category == category]


def search_tools(query: str) -> List[ToolInfo]:
    needle = query.lower()
    return [
        tool for tool in TOOLS
        if needle in tool.name.lower() or needle in tool.description.lower()
    ]


def get_free_tools_count() -> int:
    return sum(1 for tool in TOOLS if not tool.premium)


def get_premium_tools_count() -> int:
    return sum(1 for tool in TOOLS if tool.premium)


def get_tool_meta(slug: str) -> Dict[str, str]:
    """Display name and icon for history entries; unknown tools get a generic icon"""
    tool = get_tool(slug)
    if tool is None:
        return {"name": slug, "icon": DEFAULT_TOOL_ICON}
    return {"name": tool.name, "icon": tool.icon}
