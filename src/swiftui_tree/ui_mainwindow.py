from __future__ import annotations
import os
from typing import Dict, List, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QStandardItemModel, QStandardItem, QBrush, QColor, QFont
from PySide6.QtWidgets import (
    QMainWindow, QFileDialog, QMessageBox, QSplitter, QTreeView, QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QTableWidget, QTableWidgetItem, QPushButton, QComboBox, QPlainTextEdit, QLineEdit,
)

from .builder import SwiftUIParseError, build_tree, extract_declarations, list_root_candidates
from .exporter import export_json, export_outline
from .icon_map import node_icon
from .model import DeclarationMap, ViewNode
from .sample import SAMPLE_SOURCE
from .settings import ParserSettings

MSG_NO_INPUT = "Paste SwiftUI source first."
MSG_NO_CANDIDATES = "No `struct ... : View` with a `body` was found."
MSG_NO_BODY = "Could not build a tree from the body of {name}."


class MainWindow(QMainWindow):
    def __init__(self, settings: Optional[ParserSettings] = None):
        super().__init__()
        self.setWindowTitle("SwiftUI Tree Visualizer")
        self.resize(1200, 800)

        self.settings = settings or ParserSettings()
        self.declarations: DeclarationMap = {}
        self.root_node: Optional[ViewNode] = None
        self.current_file = None  # type: Optional[str]
        self.NODE_ROLE = Qt.UserRole + 1
        # item id -> node, the tree can show the same custom view many times
        self.item_nodes: Dict[int, ViewNode] = {}
        # Search state
        self._search_query = ""
        self._search_results: List[QStandardItem] = []
        self._search_index = -1

        self._make_menu()

        splitter = QSplitter(self)
        self.setCentralWidget(splitter)

        # Left panel: source editor
        left = QWidget()
        left_layout = QVBoxLayout(left)
        self.code_edit = QPlainTextEdit()
        self.code_edit.setPlaceholderText("Paste SwiftUI code here...")
        mono = QFont("Menlo")
        mono.setStyleHint(QFont.Monospace)
        self.code_edit.setFont(mono)
        left_layout.addWidget(self.code_edit)
        code_btns = QHBoxLayout()
        btn_parse = QPushButton("Parse")
        btn_example = QPushButton("Paste Example")
        code_btns.addWidget(btn_parse)
        code_btns.addWidget(btn_example)
        code_btns.addStretch(1)
        left_layout.addLayout(code_btns)
        splitter.addWidget(left)
        btn_parse.clicked.connect(self.parse_now)
        btn_example.clicked.connect(self._paste_example)

        # Center: root selector, search and tree
        center = QWidget()
        center_layout = QVBoxLayout(center)
        controls = QHBoxLayout()
        controls.addWidget(QLabel("Root View:"))
        self.root_combo = QComboBox()
        self.root_combo.setMinimumWidth(180)
        controls.addWidget(self.root_combo)
        btn_expand = QPushButton("Expand All")
        btn_collapse = QPushButton("Collapse All")
        controls.addWidget(btn_expand)
        controls.addWidget(btn_collapse)
        controls.addStretch(1)
        center_layout.addLayout(controls)
        search_row = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search views by name...")
        btn_search = QPushButton("Search")
        search_row.addWidget(self.search_edit)
        search_row.addWidget(btn_search)
        center_layout.addLayout(search_row)
        self.error_label = QLabel()
        self.error_label.setStyleSheet("color: #dc2626;")
        self.error_label.hide()
        center_layout.addWidget(self.error_label)

        self.tree = QTreeView()
        self.tree_model = QStandardItemModel()
        self.tree_model.setHorizontalHeaderLabels(["View tree", "Kind"])
        self.tree.setModel(self.tree_model)
        self.tree.clicked.connect(self._on_tree_clicked)
        center_layout.addWidget(self.tree)
        splitter.addWidget(center)
        self.root_combo.activated.connect(lambda _i: self._build_selected())
        btn_expand.clicked.connect(self.tree.expandAll)
        btn_collapse.clicked.connect(self.tree.collapseAll)
        btn_search.clicked.connect(self._search_nodes)
        self.search_edit.returnPressed.connect(self._search_nodes)

        # Right: props and modifiers of the selected node
        right = QWidget()
        right_layout = QVBoxLayout(right)
        self.name_label = QLabel("View: -")
        right_layout.addWidget(self.name_label)
        self.details_table = QTableWidget(0, 2)
        self.details_table.setHorizontalHeaderLabels(["Entry", "Value"])
        self.details_table.horizontalHeader().setStretchLastSection(True)
        self.details_table.setEditTriggers(QTableWidget.NoEditTriggers)
        right_layout.addWidget(self.details_table)
        splitter.addWidget(right)

        splitter.setSizes([450, 450, 300])

    def _make_menu(self):
        file_menu = self.menuBar().addMenu("File")
        open_act = QAction("Open Swift File...", self)
        open_act.setShortcut("Ctrl+O")
        open_act.triggered.connect(self._open_swift)
        file_menu.addAction(open_act)
        export_act = QAction("Export Tree...", self)
        export_act.triggered.connect(self._export_tree)
        file_menu.addAction(export_act)

    def _open_swift(self):
        path, _ = QFileDialog.getOpenFileName(self, "Open Swift file", os.getcwd(), "Swift (*.swift)")
        if path:
            self.load_file(path)

    def load_file(self, path: str):
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                text = f.read()
        except OSError as e:
            QMessageBox.critical(self, "Open error", str(e))
            return
        self.current_file = path
        self.code_edit.setPlainText(text)
        self.parse_now()

    def _paste_example(self):
        self.code_edit.setPlainText(SAMPLE_SOURCE)
        self.parse_now()

    def _set_error(self, msg: str):
        self.error_label.setText(msg)
        self.error_label.setVisible(bool(msg))

    def parse_now(self):
        self._set_error("")
        src = self.code_edit.toPlainText()
        if not src.strip():
            self._show_tree(None)
            self._set_error(MSG_NO_INPUT)
            return
        try:
            self.declarations = extract_declarations(src, self.settings)
        except SwiftUIParseError as e:
            QMessageBox.critical(self, "Parse error", str(e))
            return
        previous = self.root_combo.currentText()
        candidates = list_root_candidates(self.declarations, self.settings)
        self.root_combo.blockSignals(True)
        self.root_combo.clear()
        self.root_combo.addItems(candidates)
        if previous in candidates:
            self.root_combo.setCurrentText(previous)
        self.root_combo.blockSignals(False)
        if not candidates:
            self._show_tree(None)
            self._set_error(MSG_NO_CANDIDATES)
            return
        self._build_selected()

    def _build_selected(self):
        self._set_error("")
        name = self.root_combo.currentText()
        if not name:
            return
        try:
            tree = build_tree(self.declarations, name, self.settings)
        except SwiftUIParseError as e:
            QMessageBox.critical(self, "Parse error", str(e))
            return
        self._show_tree(tree)
        if tree is None:
            self._set_error(MSG_NO_BODY.format(name=name))

    def _show_tree(self, tree: Optional[ViewNode]):
        self.root_node = tree
        self._search_results = []
        self._search_index = -1
        self._populate_tree()

    def _populate_tree(self):
        self.tree_model.removeRows(0, self.tree_model.rowCount())
        self.item_nodes = {}
        self._show_details(None)
        if not self.root_node:
            return

        def add_item(parent, node: ViewNode):
            label = node.name
            if node.children:
                count = len(node.children)
                label += f"  · {count} child{'ren' if count > 1 else ''}"
            item = QStandardItem(node_icon(node), label)
            item.setEditable(False)
            item.setData(id(node), self.NODE_ROLE)
            self.item_nodes[id(node)] = node
            if self.settings.recursion_marker in node.modifiers:
                item.setForeground(QBrush(QColor("#dc2626")))
            kind_item = QStandardItem(node.kind.value)
            kind_item.setEditable(False)
            parent.appendRow([item, kind_item])
            for c in node.children:
                add_item(item, c)
            return item

        root_item = add_item(self.tree_model, self.root_node)
        self.tree.expandToDepth(1)
        root_index = self.tree_model.indexFromItem(root_item)
        if root_index.isValid():
            self.tree.setCurrentIndex(root_index)
            self._on_tree_clicked(root_index)

    def _node_at(self, index) -> Optional[ViewNode]:
        if not index.isValid():
            return None
        index = index.siblingAtColumn(0)
        return self.item_nodes.get(index.data(self.NODE_ROLE))

    def _on_tree_clicked(self, index):
        self._show_details(self._node_at(index))

    def _show_details(self, node: Optional[ViewNode]):
        self.details_table.setRowCount(0)
        if node is None:
            self.name_label.setText("View: -")
            return
        self.name_label.setText(f"View: {node.name} ({node.kind.value})")
        rows = [("prop", p) for p in node.props] + [("modifier", m) for m in node.modifiers]
        for k, v in rows:
            r = self.details_table.rowCount()
            self.details_table.insertRow(r)
            self.details_table.setItem(r, 0, QTableWidgetItem(k))
            self.details_table.setItem(r, 1, QTableWidgetItem(v))

    def _search_nodes(self):
        text = self.search_edit.text().strip()
        if not text:
            return
        q = text.lower()
        if q != self._search_query or not self._search_results:
            self._search_results = []

            def collect(item: QStandardItem):
                node = self.item_nodes.get(item.data(self.NODE_ROLE))
                if node is not None and q in node.name.lower():
                    self._search_results.append(item)
                for r in range(item.rowCount()):
                    child = item.child(r, 0)
                    if child:
                        collect(child)

            root_item = self.tree_model.item(0, 0)
            if root_item:
                collect(root_item)
            self._search_query = q
            self._search_index = -1
        if not self._search_results:
            QMessageBox.information(self, "Search", f"No view found matching '{text}'.")
            return
        # Advance to next match
        self._search_index = (self._search_index + 1) % len(self._search_results)
        index = self.tree_model.indexFromItem(self._search_results[self._search_index])
        parent = index.parent()
        while parent.isValid():
            self.tree.expand(parent)
            parent = parent.parent()
        self.tree.setCurrentIndex(index)
        self.tree.scrollTo(index)
        self._on_tree_clicked(index)

    def _export_tree(self):
        if not self.root_node:
            return
        default_name = f"{self.root_combo.currentText() or 'tree'}.txt"
        path, _ = QFileDialog.getSaveFileName(
            self, "Export tree", default_name, "Outline (*.txt);;JSON (*.json)"
        )
        if not path:
            return
        text = export_json(self.root_node) if path.endswith(".json") else export_outline(self.root_node)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            QMessageBox.critical(self, "Export error", str(e))
