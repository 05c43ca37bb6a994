"""Static stylesheet for the markup emitted by the transformation passes.

Shipped once with the reading page; passes never inject style elements.
"""

from __future__ import annotations

IMAGE_STYLES = """
.image-wrapper {
  position: relative;
  display: flex;
  flex-direction: row;
  align-items: center;
  gap: 8px;
  max-width: 100%;
  margin: 1rem 0;
}
.image-container {
  position: relative;
  flex: 1;
  max-width: 100%;
}
.image-container img {
  max-width: 100%;
  height: auto;
  display: block;
  border-radius: 0.375rem;
}
.image-wrapper img[data-can-modal="false"] {
  min-height: 100px;
  background-color: #f3f4f6;
  border: 1px dashed #d1d5db;
}
.image-wrapper img[data-can-modal="true"] {
  cursor: zoom-in;
}
[data-refresh-image] {
  display: flex;
  align-items: center;
  justify-content: center;
  width: 36px;
  height: 36px;
  flex-shrink: 0;
  background-color: #f3f4f6;
  border: 1px solid #e2e8f0;
  color: #4b5563;
  border-radius: 4px;
  cursor: pointer;
}
[data-refresh-image].opacity-0 {
  display: none;
}
[data-refresh-image].opacity-100 {
  display: flex;
}
.dark [data-refresh-image] {
  background-color: #374151;
  border-color: #4b5563;
  color: #e5e7eb;
}
"""

LINK_STYLES = """
.wiki-internal-link {
  color: #0366d6;
}
.wiki-internal-link:hover {
  text-decoration: underline;
}
.dark .wiki-internal-link {
  color: #58a6ff;
}
"""

TABLE_STYLES = """
.collapsible-table-wrapper {
  margin: 1.5rem 0;
  border-radius: 0.75rem;
  overflow: hidden;
  border: 1px solid #e2e8f0;
}
.collapsible-table-header {
  padding: 0.75rem 1.25rem;
  background-color: #f8fafc;
  cursor: pointer;
  user-select: none;
  display: flex;
  align-items: center;
  justify-content: space-between;
}
.collapsible-table-tab {
  font-weight: 600;
  color: #111827;
}
.collapsible-table-toggle {
  display: flex;
  align-items: center;
  justify-content: center;
  width: 28px;
  height: 28px;
  border-radius: 50%;
  background-color: #e2e8f0;
  color: #475569;
  margin-left: 12px;
}
.collapse-table-svg {
  width: 16px;
  height: 16px;
  transition: transform 0.2s ease;
}
.collapsible-table-toggle.closed .collapse-table-svg {
  transform: rotate(180deg);
}
.collapsible-table-content {
  overflow: auto;
}
.collapsible-table-content.hidden {
  display: none;
}
.collapsible-table-content table {
  width: 100%;
  margin: 0;
  border-collapse: collapse;
}
.dark .collapsible-table-header {
  background-color: #1e293b;
}
.dark .collapsible-table-tab {
  color: #f3f4f6;
}
"""

READER_STYLESHEET = "\n".join(s.strip() for s in (IMAGE_STYLES, LINK_STYLES, TABLE_STYLES))
