from PySide6.QtCore import QPoint, Qt
from PySide6.QtGui import QColor, QFont, QIcon, QPainter, QPen, QPixmap, QPolygon

from .model import NodeKind, ViewNode

SIZE = 48

# outline per node kind; plain views get a round badge
KIND_SHAPES = {
    NodeKind.CONTAINER: "box",
    NodeKind.FOR_EACH: "stack",
    NodeKind.IF: "diamond",
    NodeKind.BRANCH: "diamond",
    NodeKind.CUSTOM_VIEW: "framed",
    NodeKind.VIEW: "round",
}


class IconFactory:
    cache = {}

    @classmethod
    def badge(cls, label: str, color: QColor, shape: str = "round") -> QIcon:
        key = (label, color.name(), shape)
        if key in cls.cache:
            return cls.cache[key]
        pm = QPixmap(SIZE, SIZE)
        pm.fill(Qt.transparent)
        painter = QPainter(pm)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setBrush(color)
        painter.setPen(QPen(color.darker(160), 2))
        cls._outline(painter, shape, color)
        painter.setPen(QColor("white"))
        font = QFont()
        font.setPointSize(10 if len(label) < 4 else 7)
        font.setBold(True)
        painter.setFont(font)
        painter.drawText(pm.rect(), Qt.AlignCenter, label)
        painter.end()
        icon = QIcon(pm)
        cls.cache[key] = icon
        return icon

    @staticmethod
    def _outline(painter: QPainter, shape: str, color: QColor) -> None:
        if shape == "diamond":
            mid = SIZE // 2
            painter.drawPolygon(QPolygon([
                QPoint(mid, 1), QPoint(SIZE - 2, mid), QPoint(mid, SIZE - 2), QPoint(1, mid),
            ]))
        elif shape == "stack":
            # two offset cards: one row per item
            painter.setBrush(color.lighter(140))
            painter.drawRoundedRect(10, 2, 36, 34, 5, 5)
            painter.setBrush(color)
            painter.drawRoundedRect(2, 12, 36, 34, 5, 5)
        elif shape == "framed":
            painter.drawRoundedRect(2, 2, 44, 44, 8, 8)
            painter.setBrush(Qt.NoBrush)
            painter.setPen(QPen(QColor("white"), 1, Qt.DashLine))
            painter.drawRoundedRect(6, 6, 36, 36, 5, 5)
        elif shape == "box":
            painter.drawRoundedRect(2, 2, 44, 44, 4, 4)
        else:
            painter.drawEllipse(2, 2, 44, 44)


KIND_BADGES = {
    NodeKind.CONTAINER: ("BOX", "#2d6cdf"),
    NodeKind.FOR_EACH: ("EACH", "#f39c12"),
    NodeKind.IF: ("IF", "#8e44ad"),
    NodeKind.BRANCH: ("BR", "#a78bfa"),
    NodeKind.CUSTOM_VIEW: ("CUST", "#16a085"),
}

# leaf views are told apart by name prefix
LEAF_BADGES = [
    (("text", "label"), "TXT", "#e74c3c"),
    (("image", "asyncimage"), "IMG", "#7b61ff"),
    (("button", "navigationlink", "toggle"), "BTN", "#27ae60"),
    (("color", "rectangle", "circle"), "SHP", "#3b82f6"),
]


def node_icon(node: ViewNode) -> QIcon:
    shape = KIND_SHAPES.get(node.kind, "round")
    badge = KIND_BADGES.get(node.kind)
    if badge:
        label, color = badge
    else:
        name = node.name.lower()
        label, color = "VIEW", "#6b7280"
        for prefixes, leaf_label, leaf_color in LEAF_BADGES:
            if name.startswith(prefixes):
                label, color = leaf_label, leaf_color
                break
    return IconFactory.badge(label, QColor(color), shape)
