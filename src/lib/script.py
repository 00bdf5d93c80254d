"""
Behaviour script renderer

Emits one self-contained browser script. A CONFIG / SEL header carries
the breakpoint literal, timings and the generated class selectors. The
controller is an object literal assembled from method sections, each
included only when the options ask for it:

    core             open / close / toggle, breakpoint
    submenu helpers  open / close items, only when submenus are rendered
    scroll_lock      lockScroll / unlockScroll
    focus_trap       trapFocus / releaseFocus / handleFocusTrap
    outside, esc     close triggers
    accordion        toggle buttons animate max-height
    slide            cloned panel stack with back buttons
    submenus         desktop hover intent and cascade-left edge detection
    keyboard         arrow / Home / End / Escape navigation

Every nav root on the page gets its own controller; missing elements make
the controller a silent no-op.
"""

from textwrap import dedent, indent
from typing import List

from ..models.context import RenderContext
from .log import LOG


MEMBER_INDENT = " " * 6


def js_string(value: str) -> str:
    """Single-quoted JavaScript string literal"""
    escaped = str(value).replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


# ----------------------------------------------------------------------
# Method sections (written at column 0, indented on assembly)
# ----------------------------------------------------------------------
JS_IS_MOBILE = dedent("""\
    isMobile() {
      return this.mq.matches;
    }""")

JS_TOGGLE = dedent("""\
    toggle() {
      if (this.isOpen) {
        this.close();
      } else {
        this.open();
      }
    }""")

JS_SUBMENU_HELPERS = [
    dedent("""\
    childMatching(item, selector) {
      return Array.from(item.children).find(function (child) {
        return child.matches(selector);
      }) || null;
    }"""),
    dedent("""\
    submenuOf(item) {
      return this.childMatching(item, SEL.submenu);
    }"""),
    dedent("""\
    linkOf(item) {
      return this.childMatching(item, SEL.link);
    }"""),
    dedent("""\
    toggleOf(item) {
      return this.childMatching(item, SEL.toggle);
    }"""),
    dedent("""\
    setExpanded(item, expanded) {
      const button = this.toggleOf(item);
      if (button) {
        button.setAttribute('aria-expanded', expanded ? 'true' : 'false');
      }
    }"""),
    dedent("""\
    openSubmenu(item) {
      const submenu = this.submenuOf(item);
      if (!submenu) {
        return;
      }
      item.classList.add('is-open');
      this.setExpanded(item, true);
      if (!this.isMobile()) {
        this.closeSiblings(item);
        this.checkEdge(submenu);
      } else if (CONFIG.behavior === 'accordion') {
        submenu.style.maxHeight = submenu.scrollHeight + 'px';
        let parent = item.parentElement.closest(SEL.submenu);
        while (parent && this.root.contains(parent)) {
          parent.style.maxHeight = 'none';
          parent = parent.parentElement.closest(SEL.submenu);
        }
      }
    }"""),
    dedent("""\
    closeSubmenu(item) {
      const submenu = this.submenuOf(item);
      item.classList.remove('is-open');
      this.setExpanded(item, false);
      if (submenu && this.isMobile() && CONFIG.behavior === 'accordion') {
        submenu.style.maxHeight = submenu.scrollHeight + 'px';
        void submenu.offsetHeight;
        submenu.style.maxHeight = '0px';
      }
      const self = this;
      item.querySelectorAll(SEL.openItem).forEach(function (child) {
        self.closeSubmenu(child);
      });
    }"""),
    dedent("""\
    closeSiblings(item) {
      const self = this;
      Array.from(item.parentElement.children).forEach(function (sibling) {
        if (sibling !== item && sibling.classList.contains('is-open')) {
          clearTimeout(self.hideTimers.get(sibling));
          self.closeSubmenu(sibling);
        }
      });
    }"""),
    dedent("""\
    closeAllSubmenus() {
      const self = this;
      this.root.querySelectorAll(SEL.openItem).forEach(function (item) {
        item.classList.remove('is-open');
        self.setExpanded(item, false);
      });
      this.root.querySelectorAll(SEL.submenu).forEach(function (submenu) {
        submenu.style.maxHeight = '';
      });
    }"""),
]

JS_SCROLL_LOCK = [
    dedent("""\
    lockScroll() {
      this.scrollY = window.pageYOffset;
      document.body.style.position = 'fixed';
      document.body.style.top = '-' + this.scrollY + 'px';
      document.body.style.width = '100%';
    }"""),
    dedent("""\
    unlockScroll() {
      document.body.style.position = '';
      document.body.style.top = '';
      document.body.style.width = '';
      window.scrollTo(0, this.scrollY || 0);
    }"""),
]

JS_FOCUS_TRAP = [
    dedent("""\
    focusables() {
      const candidates = [this.hamburger].concat(
        Array.from(this.menu.querySelectorAll('a[href], button:not([disabled])'))
      );
      return candidates.filter(function (element) {
        return element.offsetParent !== null;
      });
    }"""),
    dedent("""\
    trapFocus() {
      this.focusHandler = this.handleFocusTrap.bind(this);
      document.addEventListener('keydown', this.focusHandler);
      const first = this.focusables()[1];
      if (first) {
        first.focus();
      }
    }"""),
    dedent("""\
    releaseFocus() {
      if (this.focusHandler) {
        document.removeEventListener('keydown', this.focusHandler);
        this.focusHandler = null;
      }
    }"""),
    dedent("""\
    handleFocusTrap(event) {
      if (event.key !== 'Tab') {
        return;
      }
      const items = this.focusables();
      if (!items.length) {
        return;
      }
      const first = items[0];
      const last = items[items.length - 1];
      if (event.shiftKey && document.activeElement === first) {
        event.preventDefault();
        last.focus();
      } else if (!event.shiftKey && document.activeElement === last) {
        event.preventDefault();
        first.focus();
      }
    }"""),
]

JS_CLICK_OUTSIDE = dedent("""\
    handleClickOutside(event) {
      if (this.isOpen && !this.root.contains(event.target)) {
        this.close();
      }
    }""")

JS_ESC_KEY = dedent("""\
    handleEscKey(event) {
      if (event.key === 'Escape' && this.isOpen) {
        this.close();
      }
    }""")

JS_ARIA = dedent("""\
    syncHidden() {
      if (this.isMobile() && !this.isOpen) {
        this.menu.setAttribute('aria-hidden', 'true');
      } else {
        this.menu.removeAttribute('aria-hidden');
      }
    }""")

JS_ACCORDION = dedent("""\
    setupSubmenuAccordion() {
      const self = this;
      this.root.querySelectorAll(SEL.toggle).forEach(function (button) {
        button.addEventListener('click', function (event) {
          event.preventDefault();
          const item = button.parentElement;
          if (item.classList.contains('is-open')) {
            self.closeSubmenu(item);
          } else {
            self.openSubmenu(item);
          }
        });
      });
    }""")

JS_SLIDE = [
    dedent("""\
    buildPanels() {
      if (this.panels || !this.list) {
        return;
      }
      this.panels = document.createElement('div');
      this.panels.className = CLS.panels;
      this.stack = [];
      this.menu.appendChild(this.panels);
      this.menu.classList.add('has-panels');
      this.showPanel(this.createPanel(this.list, null, 0));
    }"""),
    dedent("""\
    createPanel(source, title, depth) {
      const self = this;
      const panel = document.createElement('div');
      panel.className = CLS.panel;

      if (title !== null) {
        const header = document.createElement('div');
        header.className = CLS.panelHeader;
        const back = document.createElement('button');
        back.type = 'button';
        back.className = CLS.panelBack;
        back.setAttribute('aria-label', 'Back');
        back.textContent = '\\u2039 Back';
        back.addEventListener('click', function () {
          self.back();
        });
        const heading = document.createElement('span');
        heading.className = CLS.panelTitle;
        heading.textContent = title;
        header.appendChild(back);
        header.appendChild(heading);
        panel.appendChild(header);
      }

      const list = source.cloneNode(true);
      list.removeAttribute('id');
      list.className = CLS.panelList;
      list.setAttribute('role', 'menu');
      panel.appendChild(list);

      Array.from(list.children).forEach(function (item) {
        const toggle = self.toggleOf(item);
        const submenu = self.submenuOf(item);
        if (!toggle) {
          return;
        }
        if (!submenu || depth >= CONFIG.mobileDepth) {
          toggle.remove();
          return;
        }
        toggle.setAttribute('aria-label', 'Open submenu');
        toggle.addEventListener('click', function (event) {
          event.preventDefault();
          const link = self.linkOf(item);
          const label = link ? link.textContent.trim() : '';
          self.showPanel(self.createPanel(submenu, label, depth + 1));
        });
      });

      this.panels.appendChild(panel);
      return panel;
    }"""),
    dedent("""\
    showPanel(panel) {
      const current = this.stack[this.stack.length - 1];
      if (current) {
        current.classList.remove('is-active');
        current.classList.add('is-previous');
      }
      panel.classList.add('is-active');
      this.stack.push(panel);
      if (this.isOpen) {
        const target = panel.querySelector('button, a[href]');
        if (target) {
          target.focus();
        }
      }
    }"""),
    dedent("""\
    back() {
      if (this.stack.length < 2) {
        return;
      }
      const current = this.stack.pop();
      current.classList.remove('is-active');
      const previous = this.stack[this.stack.length - 1];
      previous.classList.remove('is-previous');
      previous.classList.add('is-active');
      setTimeout(function () {
        current.remove();
      }, CONFIG.transitionMs);
    }"""),
    dedent("""\
    resetPanels() {
      if (!this.panels) {
        return;
      }
      while (this.stack.length > 1) {
        this.stack.pop().remove();
      }
      if (this.stack.length) {
        this.stack[0].classList.remove('is-previous');
        this.stack[0].classList.add('is-active');
      }
    }"""),
    dedent("""\
    destroyPanels() {
      if (!this.panels) {
        return;
      }
      this.panels.remove();
      this.panels = null;
      this.stack = [];
      this.menu.classList.remove('has-panels');
    }"""),
]

JS_HOVER = [
    dedent("""\
    setupHoverIntent() {
      const self = this;
      this.root.querySelectorAll(SEL.parentItem).forEach(function (item) {
        item.addEventListener('mouseenter', function () {
          if (self.isMobile()) {
            return;
          }
          clearTimeout(self.hideTimers.get(item));
          self.openSubmenu(item);
        });
        item.addEventListener('mouseleave', function () {
          if (self.isMobile()) {
            return;
          }
          self.hideTimers.set(item, setTimeout(function () {
            self.closeSubmenu(item);
          }, CONFIG.hoverDelayMs));
        });
      });
    }"""),
    dedent("""\
    checkEdge(submenu) {
      submenu.classList.remove('cascade-left');
      const viewport = window.innerWidth || document.documentElement.clientWidth;
      if (submenu.getBoundingClientRect().right > viewport) {
        submenu.classList.add('cascade-left');
      }
    }"""),
    dedent("""\
    handleResize() {
      const self = this;
      clearTimeout(this.resizeTimer);
      this.resizeTimer = setTimeout(function () {
        if (self.isMobile()) {
          return;
        }
        self.root.querySelectorAll(SEL.openItem).forEach(function (item) {
          const submenu = self.submenuOf(item);
          if (submenu) {
            self.checkEdge(submenu);
          }
        });
      }, 100);
    }"""),
]

JS_KEYBOARD = dedent("""\
    handleKeyNav(event) {
      const link = event.target.closest ? event.target.closest(SEL.link) : null;
      if (!link || !this.root.contains(link)) {
        return;
      }
      const item = link.parentElement;
      const siblings = Array.from(item.parentElement.children).filter(function (element) {
        return element.matches(SEL.item);
      });
      const index = siblings.indexOf(item);
      const horizontal = item.matches(SEL.topItem) && !this.isMobile();
      const owner = item.parentElement.closest(SEL.item);
      const nested = Boolean(owner && this.root.contains(owner));
      const focusItem = function (target) {
        const targetLink = target ? target.querySelector(SEL.link) : null;
        if (targetLink) {
          event.preventDefault();
          targetLink.focus();
        }
      };

      switch (event.key) {
        case horizontal ? 'ArrowRight' : 'ArrowDown':
          focusItem(siblings[(index + 1) % siblings.length]);
          break;
        case horizontal ? 'ArrowLeft' : 'ArrowUp':
          focusItem(siblings[(index - 1 + siblings.length) % siblings.length]);
          break;
        case horizontal ? 'ArrowDown' : 'ArrowRight': {
          const submenu = this.submenuOf(item);
          if (submenu) {
            this.openSubmenu(item);
            focusItem(submenu.querySelector(SEL.item));
          }
          break;
        }
        case 'Home':
          focusItem(siblings[0]);
          break;
        case 'End':
          focusItem(siblings[siblings.length - 1]);
          break;
        case 'ArrowLeft':
        case 'Escape':
          if (nested) {
            event.stopPropagation();
            this.closeSubmenu(owner);
            focusItem(owner);
          }
          break;
        default:
          break;
      }
    }""")

JS_KEYBOARD_FLAT = dedent("""\
    handleKeyNav(event) {
      const link = event.target.closest ? event.target.closest(SEL.link) : null;
      if (!link || !this.root.contains(link)) {
        return;
      }
      const item = link.parentElement;
      const siblings = Array.from(item.parentElement.children).filter(function (element) {
        return element.matches(SEL.item);
      });
      const index = siblings.indexOf(item);
      const horizontal = !this.isMobile();
      const focusItem = function (target) {
        const targetLink = target ? target.querySelector(SEL.link) : null;
        if (targetLink) {
          event.preventDefault();
          targetLink.focus();
        }
      };

      switch (event.key) {
        case horizontal ? 'ArrowRight' : 'ArrowDown':
          focusItem(siblings[(index + 1) % siblings.length]);
          break;
        case horizontal ? 'ArrowLeft' : 'ArrowUp':
          focusItem(siblings[(index - 1 + siblings.length) % siblings.length]);
          break;
        case 'Home':
          focusItem(siblings[0]);
          break;
        case 'End':
          focusItem(siblings[siblings.length - 1]);
          break;
        default:
          break;
      }
    }""")


class ScriptRenderer:
    """
    Renders the navigation behaviour script.
    """

    def __init__(self, context: RenderContext) -> None:
        self.context = context

    @property
    def submenus(self) -> bool:
        return self.context.desktop_depth > 0

    @property
    def behavior(self) -> str:
        return self.context.options.submenu_behavior

    def render(self) -> str:
        """
        Render the script.

        Returns:
            JavaScript source, or "" when mobile menu support is off
        """
        ctx = self.context
        if not ctx.mobile:
            LOG("Mobile menu support off, no script", level=2)
            return ""

        LOG(f"Rendering script ({self.behavior}, breakpoint {ctx.breakpoint}px)", level=2)
        members = ",\n\n".join(indent(member, MEMBER_INDENT) for member in self.members())
        body = "\n".join([
            self.header_render(),
            "",
            "  function createNav(root) {",
            "    return {",
            members,
            "    };",
            "  }",
            "",
            self.boot_render(),
        ])
        return "(function () {\n  'use strict';\n\n" + body + "\n})();\n"

    # ------------------------------------------------------------------
    # Header
    # ------------------------------------------------------------------
    def header_render(self) -> str:
        ctx = self.context
        s = ctx.selector_make
        c = ctx.className_make

        config = [
            ("breakpoint", str(ctx.breakpoint)),
            ("mobileQuery", js_string(ctx.media_query)),
            ("transitionMs", str(ctx.transition_ms)),
            ("hoverDelayMs", str(ctx.hover_intent_ms)),
            ("mobileDepth", str(ctx.mobile_depth)),
            ("behavior", js_string(self.behavior)),
        ]
        selectors = [
            ("root", s()),
            ("hamburger", s("hamburger")),
            ("menu", s("menu")),
            ("list", s("menu-list")),
            ("topItem", s("menu-item")),
        ]
        if self.submenus:
            selectors += [
                ("item", f"{s('menu-item')}, {s('submenu-item')}"),
                ("parentItem", f"{s('menu-item')}.has-submenu, {s('submenu-item')}.has-submenu"),
                ("openItem", f"{s('menu-item')}.is-open, {s('submenu-item')}.is-open"),
                ("link", f"{s('menu-link')}, {s('submenu-link')}"),
                ("submenu", s("submenu")),
                ("toggle", s("submenu-toggle")),
            ]
        else:
            selectors += [
                ("item", s("menu-item")),
                ("link", s("menu-link")),
            ]
        classes = [
            ("panels", c("panels")),
            ("panel", c("panel")),
            ("panelHeader", c("panel-header")),
            ("panelBack", c("panel-back")),
            ("panelTitle", c("panel-title")),
            ("panelList", c("panel-list")),
        ]

        def table(name: str, entries: List, quote: bool = True) -> str:
            rows = ",\n".join(
                f"    {key}: {js_string(value) if quote else value}" for key, value in entries
            )
            return f"  const {name} = {{\n{rows}\n  }};"

        sections = [table("CONFIG", config, quote=False), "", table("SEL", selectors)]
        if self.submenus and self.behavior == 'slide':
            sections += ["", table("CLS", classes)]
        return "\n".join(sections)

    # ------------------------------------------------------------------
    # Controller members
    # ------------------------------------------------------------------
    def members(self) -> List[str]:
        """Object literal members in emission order"""
        options = self.context.options
        members = [self.state_render(), self.init_render(), JS_IS_MOBILE,
                   self.open_render(), self.close_render(), JS_TOGGLE,
                   self.breakpoint_render()]
        if self.submenus:
            members += JS_SUBMENU_HELPERS

        if options.accessibility_has('aria'):
            members.append(JS_ARIA)
        if options.accessibility_has('scroll_lock'):
            members += JS_SCROLL_LOCK
        if options.accessibility_has('focus_trap'):
            members += JS_FOCUS_TRAP
        if options.closeMethod_has('outside'):
            members.append(JS_CLICK_OUTSIDE)
        if options.closeMethod_has('esc'):
            members.append(JS_ESC_KEY)

        if self.submenus:
            members += JS_HOVER
            if self.behavior == 'accordion':
                members.append(JS_ACCORDION)
            elif self.behavior == 'slide':
                members += JS_SLIDE

        if options.accessibility_has('keyboard'):
            members.append(JS_KEYBOARD if self.submenus else JS_KEYBOARD_FLAT)
        return members

    def state_render(self) -> str:
        return "\n".join([
            "root: root,",
            "hamburger: null,",
            "menu: null,",
            "list: null,",
            "mq: null,",
            "isOpen: false,",
            "scrollY: 0,",
            "focusHandler: null,",
            "resizeTimer: null,",
            "panels: null,",
            "stack: [],",
            "hideTimers: new Map()",
        ])

    def init_render(self) -> str:
        options = self.context.options

        lines = [
            "init() {",
            "  const self = this;",
            "  this.hamburger = this.root.querySelector(SEL.hamburger);",
            "  this.menu = this.root.querySelector(SEL.menu);",
            "  this.list = this.root.querySelector(SEL.list);",
            "  if (!this.hamburger || !this.menu || !window.matchMedia) {",
            "    return;",
            "  }",
            "  this.mq = window.matchMedia(CONFIG.mobileQuery);",
            "",
            "  this.hamburger.addEventListener('click', function (event) {",
            "    event.preventDefault();",
            "    self.toggle();",
            "  });",
        ]
        if options.closeMethod_has('outside'):
            lines.append("  document.addEventListener('click', this.handleClickOutside.bind(this));")
        if options.closeMethod_has('esc'):
            lines.append("  document.addEventListener('keydown', this.handleEscKey.bind(this));")
        if options.accessibility_has('keyboard'):
            lines.append("  this.root.addEventListener('keydown', this.handleKeyNav.bind(this));")
        if self.submenus:
            lines += [
                "  this.setupHoverIntent();",
                "  window.addEventListener('resize', this.handleResize.bind(this));",
            ]
            if self.behavior == 'accordion':
                lines.append("  this.setupSubmenuAccordion();")
            elif self.behavior == 'slide':
                lines += [
                    "  if (this.isMobile()) {",
                    "    this.buildPanels();",
                    "  }",
                ]
        if options.accessibility_has('aria') and self.submenus:
            lines += [
                "  this.root.querySelectorAll(SEL.parentItem).forEach(function (item) {",
                "    const link = self.linkOf(item);",
                "    if (link) {",
                "      link.setAttribute('aria-haspopup', 'true');",
                "    }",
                "  });",
            ]
        if options.accessibility_has('aria'):
            lines.append("  this.syncHidden();")
        lines += [
            "",
            "  const onChange = this.handleBreakpoint.bind(this);",
            "  if (this.mq.addEventListener) {",
            "    this.mq.addEventListener('change', onChange);",
            "  } else {",
            "    this.mq.addListener(onChange);",
            "  }",
            "}",
        ]
        return "\n".join(lines)

    def open_render(self) -> str:
        options = self.context.options
        lines = [
            "open() {",
            "  if (this.isOpen) {",
            "    return;",
            "  }",
            "  this.isOpen = true;",
            "  this.menu.classList.add('is-open');",
            "  this.hamburger.classList.add('is-active');",
            "  this.hamburger.setAttribute('aria-expanded', 'true');",
        ]
        if options.accessibility_has('aria'):
            lines.append("  this.syncHidden();")
        if options.accessibility_has('scroll_lock'):
            lines.append("  this.lockScroll();")
        if options.accessibility_has('focus_trap'):
            lines.append("  this.trapFocus();")
        lines.append("}")
        return "\n".join(lines)

    def close_render(self) -> str:
        options = self.context.options
        lines = [
            "close() {",
            "  if (!this.isOpen) {",
            "    return;",
            "  }",
            "  this.isOpen = false;",
            "  this.menu.classList.remove('is-open');",
            "  this.hamburger.classList.remove('is-active');",
            "  this.hamburger.setAttribute('aria-expanded', 'false');",
        ]
        if options.accessibility_has('scroll_lock'):
            lines.append("  this.unlockScroll();")
        if options.accessibility_has('focus_trap'):
            lines.append("  this.releaseFocus();")
        if self.submenus:
            lines.append("  this.closeAllSubmenus();")
        if self.submenus and self.behavior == 'slide':
            lines += [
                "  const self = this;",
                "  setTimeout(function () {",
                "    self.resetPanels();",
                "  }, CONFIG.transitionMs);",
            ]
        lines += [
            "  if (this.menu.contains(document.activeElement)) {",
            "    this.hamburger.focus();",
            "  }",
        ]
        if options.accessibility_has('aria'):
            lines.append("  this.syncHidden();")
        lines.append("}")
        return "\n".join(lines)

    def breakpoint_render(self) -> str:
        lines = [
            "handleBreakpoint() {",
            "  if (!this.isMobile()) {",
            "    this.close();",
            "  }",
        ]
        if self.submenus:
            lines.append("  this.closeAllSubmenus();")
        if self.submenus and self.behavior == 'slide':
            lines += [
                "  if (this.isMobile()) {",
                "    this.buildPanels();",
                "  } else {",
                "    this.destroyPanels();",
                "  }",
            ]
        if self.context.options.accessibility_has('aria'):
            lines.append("  this.syncHidden();")
        lines.append("}")
        return "\n".join(lines)

    def boot_render(self) -> str:
        return indent(dedent("""\
              function boot() {
                document.querySelectorAll(SEL.root).forEach(function (root) {
                  createNav(root).init();
                });
              }

              if (document.readyState === 'loading') {
                document.addEventListener('DOMContentLoaded', boot);
              } else {
                boot();
              }"""), "  ")
